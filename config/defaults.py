from config.schema import PlannerConfig


DEFAULT_MAX_OPTIONS = 10
DEFAULT_OUTPUT_WITH_CLOSED = "uniminmaxWclosed.txt"
DEFAULT_OUTPUT_WITHOUT_CLOSED = "uniminmax.txt"
DEFAULT_CATALOG = "courses.json"

# Reihenfolge der Wochentage für Anzeige und Excel-Export.
# Unbekannte Bezeichner werden hinten angehängt.
DAY_ORDER = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def default_planner_config() -> PlannerConfig:
    """Standard-Konfiguration (entspricht einer leeren settings.json)."""
    return PlannerConfig(
        max_options=DEFAULT_MAX_OPTIONS,
        output_with_closed=DEFAULT_OUTPUT_WITH_CLOSED,
        output_without_closed=DEFAULT_OUTPUT_WITHOUT_CLOSED,
        catalog_path=DEFAULT_CATALOG,
    )


def example_catalog_records() -> list[dict]:
    """Kleiner Beispielkatalog im Eingabeformat.

    CS1 gibt es in zwei Gruppen, CS2 überschneidet sich mit CS1 (Standard)
    am Montag 9-10, MA1 ist geschlossen.
    """
    return [
        {"code": "CS1", "credits": 3,
         "times": [{"day": "Mon", "start": 9, "end": 10}]},
        {"code": "CS1", "group": "B", "credits": 3,
         "times": [{"day": "Mon", "start": 10, "end": 11}]},
        {"code": "CS2", "credits": 4,
         "times": [{"day": "Mon", "start": 9, "end": 10}]},
        {"code": "MA1", "group": "A", "closed": True, "credits": 5,
         "times": [{"day": "Tue", "start": 8, "end": 9.5},
                   {"day": "Thu", "start": 8, "end": 9.5}]},
    ]
