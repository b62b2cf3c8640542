import pytest
from rdflib import Literal, URIRef
from rdflib.namespace import XSD

from abm2owl.axioms import DataPropertyAssertion
from abm2owl.naming import NamingPolicy
from abm2owl.values import (
    AgentCollection,
    AgentRef,
    Number,
    Opaque,
    Sequence,
    Text,
    adapt,
    as_value,
)

STATE = "http://example.org/farm-1.0.owl"
SUBJECT = URIRef(STATE + "#turtle_0")
PROP = URIRef("http://example.org/farm.owl#stuff")


@pytest.fixture
def naming():
    return NamingPolicy("http://example.org/farm.owl")


def literals(axioms):
    assert all(a.subject == SUBJECT and a.prop == PROP for a in axioms)
    return {a.value for a in axioms}


def any_uri(local):
    return Literal(f"{STATE}#{local}", datatype=XSD.anyURI)


def test_text(naming):
    axioms = adapt(SUBJECT, PROP, Text("hungry"), naming, STATE)
    assert axioms == {DataPropertyAssertion(PROP, SUBJECT, Literal("hungry", datatype=XSD.string))}


def test_number(naming):
    assert literals(adapt(SUBJECT, PROP, Number(3), naming, STATE)) == {Literal(3.0, datatype=XSD.double)}


def test_sequence_elements_are_typed_individually(naming):
    value = Sequence((Number(1), AgentRef("turtle 2"), Text("a"), Sequence((Number(4),))))
    assert literals(adapt(SUBJECT, PROP, value, naming, STATE)) == {
        Literal(1.0, datatype=XSD.double),
        any_uri("turtle_2"),
        Literal("a", datatype=XSD.string),
        Literal("[4]", datatype=XSD.string),
    }


def test_agent_collection(naming):
    value = AgentCollection(("turtle 1", "patch 0 -1"))
    assert literals(adapt(SUBJECT, PROP, value, naming, STATE)) == {any_uri("turtle_1"), any_uri("patch_0_-1")}


def test_single_agent_and_opaque_are_strings(naming):
    assert literals(adapt(SUBJECT, PROP, AgentRef("turtle 5"), naming, STATE)) == {
        Literal("(turtle 5)", datatype=XSD.string)
    }
    assert literals(adapt(SUBJECT, PROP, Opaque("true"), naming, STATE)) == {Literal("true", datatype=XSD.string)}


@pytest.mark.parametrize("raw", [
    "text", 2, 2.5, True, None, [1, "x"], {"agent": "turtle 1"}, {"agents": ["turtle 1"]},
    {"colour": "red"}, object(), (3, {"agent": "turtle 0"}),
])
def test_every_shape_yields_an_assertion(naming, raw):
    assert len(adapt(SUBJECT, PROP, as_value(raw), naming, STATE)) >= 1


def test_as_value():
    assert as_value("a") == Text("a")
    assert as_value(3) == Number(3.0)
    assert as_value(False) == Opaque("false")
    assert as_value(None) == Opaque("nobody")
    assert as_value([1, {"agent": "turtle 0"}]) == Sequence((Number(1.0), AgentRef("turtle 0")))
    assert as_value({"agents": ["turtle 0", "turtle 1"]}) == AgentCollection(("turtle 0", "turtle 1"))
    assert as_value({AgentRef("turtle 1"), AgentRef("turtle 0")}) == AgentCollection(("turtle 0", "turtle 1"))
    assert as_value(Text("kept")) == Text("kept")


def test_adapt_is_repeatable(naming):
    value = Sequence((Number(1), Number(1)))
    first = adapt(SUBJECT, PROP, value, naming, STATE)
    assert first == adapt(SUBJECT, PROP, value, naming, STATE)
    assert len(first) == 1


@pytest.mark.parametrize("number, printed", [
    (4, "4"),
    (4.0, "4"),
    (-2.0, "-2"),
    (2.5, "2.5"),
    (1e20, "1e+20"),
])
def test_number_prints_like_netlogo(number, printed):
    assert Number(number).render() == printed
    assert Sequence((Number(number),)).render() == f"[{printed}]"
