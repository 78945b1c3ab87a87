from types import MappingProxyType

import pytest

from rpcdispatch.rpc.method import FaultKind, MethodCall, MethodFault, MethodReturn, is_associative
from rpcdispatch.utils.exceptions import InvalidRequest


def test_is_associative():
    assert is_associative({"a": 1})
    assert is_associative({1: "a", 0: "b"})
    assert not is_associative({0: "a", 1: "b"})
    assert not is_associative({})


def test_method_call_tags_parameter_shape():
    assert MethodCall("m", [1, 2]).parameters == (1, 2)
    assert MethodCall("m", None).parameters == ()
    named = MethodCall("m", {"a": 1})
    assert named.is_named
    assert isinstance(named.parameters, MappingProxyType)
    assert not MethodCall("m", {0: "x", 1: "y"}).is_named


def test_method_call_is_immutable():
    source = {"a": 1}
    call = MethodCall("m", source)
    source["a"] = 2
    assert call.parameters["a"] == 1
    with pytest.raises(TypeError):
        call.parameters["a"] = 3
    with pytest.raises(AttributeError):
        call.method_name = "other"


@pytest.mark.parametrize("bad", ["", None, 5])
def test_method_call_requires_name(bad):
    with pytest.raises(InvalidRequest):
        MethodCall(bad)


def test_method_call_rejects_scalar_parameters():
    with pytest.raises(InvalidRequest):
        MethodCall("m", "abc")


def test_envelopes():
    ok = MethodReturn({"x": 1}, call_id="r1")
    assert not ok.is_fault
    assert ok.call_id == "r1"
    fault = MethodFault(message="nope", code=-32601, kind=FaultKind.METHOD_NOT_EXISTS)
    assert fault.is_fault
    assert fault.to_dict() == {"code": -32601, "message": "nope", "data": None, "kind": "method_not_exists"}
