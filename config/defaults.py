from config.schema import (
    AppConfig,
    LessonSlot,
    SlotGridConfig,
)


def default_slot_grid() -> SlotGridConfig:
    """Standard-Wochenraster mit sechs Einheiten pro Tag.

    Raster:
    1. Einheit  08:00 - 08:45
    2. Einheit  08:50 - 09:35
    3. Einheit  09:55 - 10:40
    4. Einheit  10:45 - 11:30
    5. Einheit  11:45 - 12:30
    6. Einheit  12:35 - 13:20

    Fünf Tage (Mo-Fr) → 30 Slots pro Woche.
    """
    return SlotGridConfig(
        day_names=["Mo", "Di", "Mi", "Do", "Fr"],
        lesson_slots=[
            LessonSlot(slot_number=1, start_time="08:00", end_time="08:45"),
            LessonSlot(slot_number=2, start_time="08:50", end_time="09:35"),
            LessonSlot(slot_number=3, start_time="09:55", end_time="10:40"),
            LessonSlot(slot_number=4, start_time="10:45", end_time="11:30"),
            LessonSlot(slot_number=5, start_time="11:45", end_time="12:30"),
            LessonSlot(slot_number=6, start_time="12:35", end_time="13:20"),
        ],
    )


def default_app_config() -> AppConfig:
    """Vollständige Default-Konfiguration."""
    return AppConfig(
        institution_name="Muster-Schule",
        slot_grid=default_slot_grid(),
    )
