"""Tests for convention schemas and the convention registry."""

import pytest
from pydantic import ValidationError

from sofa_conventions.conventions import (
    FREE_FIELD_DIRECTIVITY_TF,
    SOFA_BASE,
    find_variable_spec,
    get_convention,
    list_supported_conventions,
)
from sofa_conventions.errors import UnknownConvention
from sofa_conventions.models import AttributeRule, VariableSpec
from sofa_conventions.units import CoordinateSystem, Units


class TestConventionRegistry:
    """Lookup of conventions by their SOFAConventions name."""

    def test_list_supported_conventions(self):
        assert list_supported_conventions() == [
            "FreeFieldDirectivityTF",
            "GeneralFIR",
            "GeneralTF",
            "SimpleFreeFieldHRIR",
            "SimpleFreeFieldTF",
            "SimpleHeadphoneIR",
        ]

    def test_get_known_convention(self):
        schema = get_convention("FreeFieldDirectivityTF")
        assert schema is FREE_FIELD_DIRECTIVITY_TF
        assert schema.name == "FreeFieldDirectivityTF"

    def test_generic_schema_by_name(self):
        assert get_convention("SOFA") is SOFA_BASE
        assert "SOFA" not in list_supported_conventions()

    def test_unknown_convention_lists_available(self):
        with pytest.raises(UnknownConvention) as exc_info:
            get_convention("MultiSpeakerBRIR")
        message = str(exc_info.value)
        assert "MultiSpeakerBRIR" in message
        assert "SimpleFreeFieldHRIR" in message

    def test_unknown_convention_is_value_error(self):
        with pytest.raises(ValueError):
            get_convention("NONEXISTENT")

    def test_find_variable_spec(self):
        assert find_variable_spec("ListenerPosition").signatures == (
            ("I", "C"),
            ("M", "C"),
            ("I", "C", "M"),
            ("M", "C", "I"),
        )
        assert find_variable_spec("Data.IR").signature == ("M", "R", "N")
        assert find_variable_spec("Nonsense") is None


class TestConventionSchemas:
    """Every convention shares the generic SOFA requirements."""

    @pytest.mark.parametrize("name", list_supported_conventions())
    def test_inherits_base_requirements(self, name):
        schema = get_convention(name)
        for required in ("ListenerPosition", "ReceiverPosition", "SourcePosition", "EmitterPosition"):
            assert schema.variable(required).required
        assert schema.fixed_dimensions["I"] == 1
        assert schema.fixed_dimensions["C"] == 3
        assert schema.attribute("SOFAConventions").equals == name

    def test_directivity_variables(self):
        schema = get_convention("FreeFieldDirectivityTF")
        assert schema.variable("Data.Real").signature == ("M", "R", "N")
        assert schema.variable("Data.Imag").signature == ("M", "R", "N")
        assert schema.variable("N").units is Units.HERTZ
        assert ("Data.Real", "Data.Imag") in schema.matching_shapes

    def test_hrir_overrides_source_coordinates(self):
        schema = get_convention("SimpleFreeFieldHRIR")
        source = schema.variable("SourcePosition")
        assert source.coordinates == ((CoordinateSystem.SPHERICAL, Units.SPHERICAL),)
        assert schema.variable("ListenerView").required
        assert schema.fixed_dimensions == {"I": 1, "C": 3, "R": 2, "E": 1}

    def test_up_vectors_take_view_metadata(self):
        up = SOFA_BASE.variable("ListenerUp")
        assert up.coordinates is None
        assert up.coordinates_from == "ListenerView"
        assert up.is_positional

    def test_receiver_signatures(self):
        receiver = SOFA_BASE.variable("ReceiverPosition")
        assert receiver.signatures_for_rank(3) == [("R", "C", "I"), ("R", "C", "M")]
        assert receiver.ranks == (2, 3)


class TestSchemaExtension:
    def test_extend_replaces_and_appends(self):
        extended = SOFA_BASE.extend(
            "Custom",
            attributes=(AttributeRule(name="DataType", equals="FIR"), AttributeRule(name="Extra")),
            variables=(VariableSpec(name="Custom.Value", signatures=(("M",),)),),
            fixed_dimensions={"R": 4},
        )
        names = [rule.name for rule in extended.attributes]
        assert names.count("DataType") == 1
        assert names.index("DataType") == [rule.name for rule in SOFA_BASE.attributes].index("DataType")
        assert names[-1] == "Extra"
        assert extended.variable("Custom.Value") is not None
        assert extended.fixed_dimensions == {"I": 1, "C": 3, "R": 4}
        # base is untouched
        assert SOFA_BASE.variable("Custom.Value") is None
        assert "R" not in SOFA_BASE.fixed_dimensions

    def test_schemas_are_frozen(self):
        with pytest.raises(ValidationError):
            SOFA_BASE.name = "Other"


class TestModelValidation:
    def test_unknown_dimension_letter_rejected(self):
        with pytest.raises(ValidationError, match="unknown dimension letters"):
            VariableSpec(name="Bad", signatures=(("M", "Q"),))

    def test_empty_signatures_rejected(self):
        with pytest.raises(ValidationError):
            VariableSpec(name="Bad", signatures=())

    def test_attribute_rule_accepts(self):
        rule = AttributeRule(name="RoomType", one_of=("free field", "reverberant"))
        assert rule.accepts("reverberant")
        assert not rule.accepts("shoebox")
        assert "free field" in rule.expectation()
