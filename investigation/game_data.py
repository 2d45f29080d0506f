"""
Built-in mansion case: seven rooms and five clue/suspect bindings.
"""

from investigation.case_file import CaseFile

MANSION = {
    "name": "Detective Quest: Master Mode",
    "intro": "Explore the mansion and collect clues. At the end, accuse a suspect.",
    "rooms": {
        "name": "Hall",
        "clue": "Muddy footprints",
        "left": {
            "name": "Parlor",
            "clue": "Book missing a page",
            "left": {"name": "Kitchen", "clue": "Lost key"},
            "right": {"name": "Library"},
        },
        "right": {
            "name": "Corridor",
            "left": {"name": "Bedroom", "clue": "Stained sheet"},
            "right": {"name": "Garden", "clue": "Lost drawer"},
        },
    },
    "bindings": [
        {"clue": "Muddy footprints", "suspect": "Gardener"},
        {"clue": "Lost drawer", "suspect": "Gardener"},
        {"clue": "Lost key", "suspect": "Butler"},
        {"clue": "Stained sheet", "suspect": "Butler"},
        {"clue": "Book missing a page", "suspect": "Librarian"},
    ],
}


def reference_case() -> CaseFile:
    return CaseFile.from_dict(MANSION)
