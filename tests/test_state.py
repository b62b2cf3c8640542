import pytest
from rdflib import Literal, URIRef
from rdflib.namespace import XSD

from abm2owl.axioms import ClassAssertion, DataPropertyAssertion, ObjectPropertyAssertion, of_type
from abm2owl.errors import SequencingError
from abm2owl.session import Session
from abm2owl.state import state_axioms, state_ontology_iri
from abm2owl.world import PATCH_BUILTINS, PATCH_OWN_START, PatchSnapshot, World, pad_slots

from conftest import MODEL_IRI, NS

STATE_NS = "http://example.org/farm-1.0.owl#"


def u(local):
    return URIRef(NS + local)


def s(local):
    return URIRef(STATE_NS + local)


def double(x):
    return Literal(float(x), datatype=XSD.double)


@pytest.mark.parametrize("model, tick, expected", [
    ("http://example.org/farm.owl", 3, "http://example.org/farm-3.0.owl"),
    ("http://example.org/farm.owl", 2.5, "http://example.org/farm-2.5.owl"),
    ("http://example.org/farm.ttl", 0, "http://example.org/farm-0.0.ttl"),
    ("http://example.org/farm", 10, "http://example.org/farm-10.0"),
    ("http://example.org/farm#", 1, "http://example.org/farm-1.0"),
    ("http://example.org/farm/", 1, "http://example.org/farm-1.0"),
    ("http://example.org/farm.owl#", 1, "http://example.org/farm-1.0.owl"),
])
def test_state_ontology_iri(model, tick, expected):
    assert state_ontology_iri(model, tick) == URIRef(expected)


def test_patch_assertions():
    world = World(
        patch_vars=list(PATCH_BUILTINS) + ["grass", "owner"],
        patch_list=[PatchSnapshot(3, 4, pad_slots(PATCH_OWN_START, [2.5, "farmer"]))],
    )
    session = Session()
    session.set_model(MODEL_IRI)
    _, axioms = state_axioms(session, world, 1)

    patch = s("patch_3_4")
    assert axioms == {
        ClassAssertion(u("Patch"), patch),
        DataPropertyAssertion(u("x"), patch, double(3)),
        DataPropertyAssertion(u("y"), patch, double(4)),
        DataPropertyAssertion(u("grass"), patch, double(2.5)),
        DataPropertyAssertion(u("owner"), patch, Literal("farmer", datatype=XSD.string)),
    }


def test_turtles(farm, session):
    _, axioms = state_axioms(session, farm, 1)

    cow = s("turtle_0")
    assert ClassAssertion(u("Cow"), cow) in axioms
    assert ObjectPropertyAssertion(u("location"), cow, s("patch_3_4")) in axioms
    assert DataPropertyAssertion(u("x"), cow, double(3.2)) in axioms
    assert DataPropertyAssertion(u("y"), cow, double(3.9)) in axioms
    assert DataPropertyAssertion(u("age"), cow, double(4)) in axioms

    grass = s("turtle_1")
    assert ClassAssertion(u("Grass"), grass) in axioms
    assert DataPropertyAssertion(u("height"), grass, double(0.5)) in axioms
    # hidden turtles have no location
    assert not [a for a in axioms if getattr(a, "subject", None) == grass and a.prop in (u("location"), u("x"))]


def test_links(farm, session):
    _, axioms = state_axioms(session, farm, 1)

    assert ObjectPropertyAssertion(u("knows"), s("turtle_0"), s("turtle_2")) in axioms

    reified = s("eats_0_1")
    assert ClassAssertion(u("Eats"), reified) in axioms
    assert ObjectPropertyAssertion(u("eats_"), s("turtle_0"), reified) in axioms
    assert ObjectPropertyAssertion(u("_eats"), reified, s("turtle_1")) in axioms
    assert DataPropertyAssertion(u("amount"), reified, double(2)) in axioms
    assert not [a for a in of_type(axioms, ObjectPropertyAssertion) if a.prop == u("eats")]


def test_globals(farm, session):
    _, axioms = state_axioms(session, farm, 1)
    g = session.naming.global_individual()
    assert DataPropertyAssertion(u("season"), g, Literal("spring", datatype=XSD.string)) in axioms
    assert DataPropertyAssertion(u("rainfall"), g, double(12)) in axioms


def test_no_patches_option(farm):
    session = Session(["no-patches"])
    session.set_model(MODEL_IRI)
    _, axioms = state_axioms(session, farm, 1)

    assert not [a for a in of_type(axioms, ClassAssertion) if a.cls == u("Patch")]
    assert not [a for a in axioms if getattr(a, "prop", None) in (u("location"), u("x"), u("y"))]
    assert ClassAssertion(u("Cow"), s("turtle_0")) in axioms


def test_state_iri_returned(farm, session):
    iri, _ = state_axioms(session, farm, 1)
    assert iri == URIRef("http://example.org/farm-1.0.owl")


def test_state_requires_model(farm):
    with pytest.raises(SequencingError):
        state_axioms(Session(), farm, 0)


def test_hash_terminated_model_iri(farm):
    session = Session()
    session.set_model("http://example.org/farm#")
    iri, axioms = state_axioms(session, farm, 1)

    assert iri == URIRef("http://example.org/farm-1.0")
    cow = URIRef("http://example.org/farm-1.0#turtle_0")
    assert ClassAssertion(URIRef("http://example.org/farm#Cow"), cow) in axioms
    subjects = {a.individual for a in of_type(axioms, ClassAssertion)}
    assert all(str(i).count("#") == 1 for i in subjects)


def test_unbred_turtle_in_breeded_model():
    world = World.from_dict({
        "breeds": [{"name": "cows", "singular": "cow"}],
        "turtles_own": ["energy"],
        "patches": [{"pxcor": 0, "pycor": 0}],
        "turtles": [
            {"id": "turtle 0", "breed": "cows"},
            {"id": "turtle 1", "own": {"energy": 5}},
        ],
    })
    session = Session()
    session.set_model(MODEL_IRI)
    _, axioms = state_axioms(session, world, 1)

    assert ClassAssertion(u("Cow"), s("turtle_0")) in axioms
    assert ClassAssertion(u("Turtle"), s("turtle_1")) in axioms
    assert DataPropertyAssertion(u("energy"), s("turtle_1"), double(5)) in axioms
    assert ObjectPropertyAssertion(u("location"), s("turtle_1"), s("patch_0_0")) in axioms
