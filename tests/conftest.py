import pytest

from abm2owl.session import Session
from abm2owl.world import (
    LINK_OWN_START,
    PATCH_BUILTINS,
    PATCH_OWN_START,
    TURTLE_OWN_START,
    Kind,
    LinkSnapshot,
    PatchSnapshot,
    TurtleSnapshot,
    World,
    pad_slots,
)

MODEL_IRI = "http://example.org/farm.owl"
NS = MODEL_IRI + "#"


@pytest.fixture
def farm():
    """Cows eat grass; eats links carry an amount; patches have grass."""
    return World(
        breed_kinds=[Kind("cows", ("age",), singular="cow"), Kind("grasses", ("height",), singular="grass")],
        link_kinds=[Kind("eats", ("amount",)), Kind("knows")],
        patch_vars=list(PATCH_BUILTINS) + ["fertility"],
        global_values={"season": "spring", "rainfall": 12},
        turtle_list=[
            TurtleSnapshot("turtle 0", "cows", pad_slots(TURTLE_OWN_START, [4]), x=3.2, y=3.9),
            TurtleSnapshot("turtle 1", "grasses", pad_slots(TURTLE_OWN_START, [0.5]), x=1.0, y=1.0, hidden=True),
            TurtleSnapshot("turtle 2", "cows", pad_slots(TURTLE_OWN_START, [7]), x=0.0, y=0.0),
        ],
        patch_list=[
            PatchSnapshot(3, 4, pad_slots(PATCH_OWN_START, [0.8])),
            PatchSnapshot(0, 0, pad_slots(PATCH_OWN_START, [0.1])),
        ],
        link_list=[
            LinkSnapshot("eats 0 1", "eats", "turtle 0", "turtle 1", directed=True,
                         slots=pad_slots(LINK_OWN_START, [2])),
            LinkSnapshot("knows 0 2", "knows", "turtle 0", "turtle 2", directed=False),
        ],
    )


@pytest.fixture
def session():
    s = Session()
    s.set_model(MODEL_IRI)
    return s
