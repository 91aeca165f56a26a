"""Tests for the template model and value parsing."""

from __future__ import annotations

import copy

from consolecheck.template.models import (
    MAX_NESTING_DEPTH,
    JoinValue,
    LiteralValue,
    MappingValue,
    RefValue,
    SequenceValue,
    Template,
    UnknownValue,
    is_truthy,
    parse_value,
)


class TestParseValue:
    def test_scalars_are_literals(self) -> None:
        assert parse_value("abc") == LiteralValue("abc")
        assert parse_value(443) == LiteralValue(443)
        assert parse_value(True) == LiteralValue(True)

    def test_ref(self) -> None:
        assert parse_value({"Ref": "AWS::Region"}) == RefValue("AWS::Region")

    def test_non_string_ref_is_unknown(self) -> None:
        assert isinstance(parse_value({"Ref": ["x"]}), UnknownValue)

    def test_join(self) -> None:
        value = parse_value({"Fn::Join": ["-", ["a", {"Ref": "AWS::Region"}]]})
        assert value == JoinValue("-", (LiteralValue("a"), RefValue("AWS::Region")))

    def test_malformed_join_is_unknown(self) -> None:
        assert isinstance(parse_value({"Fn::Join": ["", "not-a-list"]}), UnknownValue)
        assert isinstance(parse_value({"Fn::Join": [1, ["a"]]}), UnknownValue)
        assert isinstance(parse_value({"Fn::Join": ["only-separator"]}), UnknownValue)

    def test_other_intrinsics_are_unknown(self) -> None:
        assert isinstance(parse_value({"Fn::Sub": "com.amazonaws.${AWS::Region}.ssm"}), UnknownValue)
        assert isinstance(parse_value({"Fn::GetAtt": ["Sg", "GroupId"]}), UnknownValue)

    def test_plain_objects_become_mappings(self) -> None:
        value = parse_value({"Effect": "Allow", "Action": ["s3:GetObject"]})
        assert isinstance(value, MappingValue)
        assert value.get("Effect") == LiteralValue("Allow")
        assert value.get("Action") == SequenceValue((LiteralValue("s3:GetObject"),))
        assert value.get("Missing") is None

    def test_null_is_unknown(self) -> None:
        assert parse_value(None) == UnknownValue(None)

    def test_deep_nesting_is_cut_off(self) -> None:
        raw: list = []
        for _ in range(5000):
            raw = [raw]
        value = parse_value({"Tags": raw})
        for _ in range(MAX_NESTING_DEPTH):
            value = value.get("Tags") if isinstance(value, MappingValue) else value.items[0]
        assert isinstance(value, UnknownValue)

    def test_self_referential_list(self) -> None:
        raw: list = []
        raw.append(raw)
        value = parse_value(raw)
        assert isinstance(value, SequenceValue)
        assert is_truthy(value)


class TestIsTruthy:
    def test_absent_is_falsy(self) -> None:
        assert is_truthy(None) is False
        assert is_truthy(UnknownValue(None)) is False

    def test_booleans(self) -> None:
        assert is_truthy(LiteralValue(True)) is True
        assert is_truthy(LiteralValue(False)) is False

    def test_cloudformation_string_booleans(self) -> None:
        assert is_truthy(LiteralValue("true")) is True
        assert is_truthy(LiteralValue("False")) is False
        assert is_truthy(LiteralValue("")) is False

    def test_intrinsics_count_as_set(self) -> None:
        assert is_truthy(RefValue("InstanceProfile")) is True
        assert is_truthy(JoinValue("", ())) is True

    def test_collections(self) -> None:
        assert is_truthy(MappingValue()) is False
        assert is_truthy(parse_value({"Statement": []})) is True
        assert is_truthy(SequenceValue()) is False


class TestTemplate:
    def test_missing_resources_is_empty(self) -> None:
        assert len(Template.from_dict({})) == 0
        assert len(Template.from_dict({"Parameters": {}})) == 0
        assert len(Template.from_dict(None)) == 0

    def test_non_mapping_resources_is_empty(self) -> None:
        assert len(Template.from_dict({"Resources": ["oops"]})) == 0

    def test_of_type_keeps_document_order(self) -> None:
        template = Template.from_dict({
            "Resources": {
                "B": {"Type": "AWS::EC2::Subnet"},
                "A": {"Type": "AWS::EC2::Subnet"},
                "C": {"Type": "AWS::EC2::VPC"},
            }
        })
        assert [r.logical_id for r in template.of_type("AWS::EC2::Subnet")] == ["B", "A"]

    def test_malformed_resources_never_match(self) -> None:
        template = Template.from_dict({
            "Resources": {
                "NotADict": "AWS::EC2::Subnet",
                "NoType": {"Properties": {}},
                "BadProperties": {"Type": "AWS::EC2::Subnet", "Properties": "x"},
            }
        })
        assert len(template) == 3
        assert template.resources["NotADict"].type == ""
        assert template.resources["NoType"].type == ""
        subnet = template.of_type("AWS::EC2::Subnet")[0]
        assert subnet.properties == MappingValue()

    def test_vpc_endpoints_require_explicit_type(self) -> None:
        template = Template.from_dict({
            "Resources": {
                "Iface": {"Type": "AWS::EC2::VPCEndpoint", "Properties": {"VpcEndpointType": "Interface"}},
                "Gw": {"Type": "AWS::EC2::VPCEndpoint", "Properties": {"VpcEndpointType": "Gateway"}},
                "Unset": {"Type": "AWS::EC2::VPCEndpoint", "Properties": {}},
            }
        })
        assert [r.logical_id for r in template.vpc_endpoints("Interface")] == ["Iface"]
        assert [r.logical_id for r in template.vpc_endpoints("Gateway")] == ["Gw"]

    def test_document_is_not_mutated(self, compliant_document: dict) -> None:
        before = copy.deepcopy(compliant_document)
        Template.from_dict(compliant_document)
        assert compliant_document == before
