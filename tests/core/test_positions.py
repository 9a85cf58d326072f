"""Tests for position and orientation accessors."""

import numpy as np
import pytest

from sofa_conventions.accessors import position_variable_name
from sofa_conventions.errors import DimensionConflict, MissingAttribute, MissingVariable, ShapeMismatch
from sofa_conventions.file import open_file
from sofa_conventions.units import CoordinateSystem, Units


class TestPositionVariableName:
    def test_names(self):
        assert position_variable_name("Listener") == "ListenerPosition"
        assert position_variable_name("Emitter", "Up") == "EmitterUp"

    def test_rejects_unknown_role_or_kind(self):
        with pytest.raises(ValueError, match="role"):
            position_variable_name("Speaker")
        with pytest.raises(ValueError, match="kind"):
            position_variable_name("Source", "Orientation")


class TestGetPosition:
    def test_coordinate_metadata(self, directivity_path):
        with open_file(directivity_path) as sofa:
            assert sofa.get_position("Listener") == (CoordinateSystem.CARTESIAN, Units.METRE)
            assert sofa.has_position("Receiver")
            assert not sofa.has_position("Source", "View")

    def test_spherical_source(self, hrir_path):
        with open_file(hrir_path) as sofa:
            assert sofa.get_position("Source") == (CoordinateSystem.SPHERICAL, Units.SPHERICAL)

    def test_up_shares_view_metadata(self, hrir_path):
        with open_file(hrir_path) as sofa:
            assert "Type" not in sofa.attributes("ListenerUp")
            assert sofa.get_position("Listener", "Up") == sofa.get_position("Listener", "View")

    def test_missing_variable(self, directivity_path):
        with open_file(directivity_path) as sofa:
            with pytest.raises(MissingVariable) as exc_info:
                sofa.get_position("Receiver", "View")
        assert exc_info.value.name == "ReceiverView"

    def test_missing_units(self, tmp_path, raw_sofa_writer, directivity_layout):
        directivity_layout["variables"]["EmitterPosition"]["attrs"] = {"Type": "cartesian"}
        path = raw_sofa_writer(tmp_path / "f.sofa", directivity_layout["dimensions"], directivity_layout["variables"])
        with open_file(path) as sofa:
            with pytest.raises(MissingAttribute, match="EmitterPosition:Units"):
                sofa.get_position("Emitter")

    def test_set_position_metadata(self, tmp_path, directivity_path):
        with open_file(directivity_path, mode="a") as sofa:
            sofa.set_position("Source", "Position", CoordinateSystem.SPHERICAL, Units.SPHERICAL)
        with open_file(directivity_path) as sofa:
            assert sofa.get_position("Source") == (CoordinateSystem.SPHERICAL, Units.SPHERICAL)
            assert sofa.get_attribute("Type", "SourcePosition") == "spherical"


class TestGetPositionValues:
    def test_two_dimensional_listener(self, directivity_path):
        with open_file(directivity_path) as sofa:
            buffer = sofa.get_position_values("Source", ndim=2)
        assert buffer.shape == (1, 3)
        assert buffer.dimensions == ("I", "C")
        assert list(buffer) == [0.0, 0.0, 1.5]

    def test_three_dimensional_receiver(self, directivity_path):
        with open_file(directivity_path) as sofa:
            buffer = sofa.get_position_values("Receiver", ndim=3)
        assert buffer.shape == (2, 3, 1)
        assert buffer.dimensions == ("R", "C", "I")
        assert buffer[1, 1, 0] == -0.1

    def test_position_per_measurement(self, hrir_path):
        with open_file(hrir_path) as sofa:
            buffer = sofa.get_position_values("Source")
        assert buffer.dimensions == ("M", "C")
        np.testing.assert_array_equal(buffer.to_array()[1], [90.0, 0.0, 1.2])

    def test_two_dimensional_request_on_three_dimensional_variable(
        self, tmp_path, raw_sofa_writer, directivity_layout
    ):
        directivity_layout["variables"]["ListenerPosition"] = {
            "dims": ("I", "C", "M"),
            "attrs": {"Type": "cartesian", "Units": "metre"},
        }
        path = raw_sofa_writer(
            tmp_path / "f.sofa", directivity_layout["dimensions"], directivity_layout["variables"]
        )
        with open_file(path) as sofa:
            with pytest.raises(ShapeMismatch) as exc_info:
                sofa.get_position_values("Listener", ndim=2)
        assert (exc_info.value.expected, exc_info.value.found) == (2, 3)

    def test_three_dimensional_listener(self, tmp_path, raw_sofa_writer, directivity_layout):
        # [I, C, M]: one listener, three coordinates, two measurements
        directivity_layout["variables"]["ListenerPosition"] = {
            "dims": ("I", "C", "M"),
            "values": np.arange(6.0).reshape(1, 3, 2),
            "attrs": {"Type": "cartesian", "Units": "metre"},
        }
        path = raw_sofa_writer(
            tmp_path / "moving_listener.sofa",
            directivity_layout["dimensions"],
            directivity_layout["variables"],
            directivity_layout["attributes"],
        )
        with open_file(path) as sofa:
            buffer = sofa.get_position_values("Listener", ndim=3)
            assert sofa.validate().valid
        assert buffer.shape == (1, 3, 2)
        assert buffer.dimensions == ("I", "C", "M")
        # index, then coordinate, then measurement
        assert buffer[0, 1, 0] == 2.0
        assert buffer[0, 2, 1] == 5.0
        assert list(buffer) == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]

    def test_three_dimensional_source_per_measurement(self, tmp_path, raw_sofa_writer, directivity_layout):
        directivity_layout["variables"]["SourcePosition"] = {
            "dims": ("M", "C", "I"),
            "values": [[[1.0], [2.0], [3.0]], [[4.0], [5.0], [6.0]]],
            "attrs": {"Type": "cartesian", "Units": "metre"},
        }
        path = raw_sofa_writer(
            tmp_path / "moving_source.sofa",
            directivity_layout["dimensions"],
            directivity_layout["variables"],
            directivity_layout["attributes"],
        )
        with open_file(path) as sofa:
            buffer = sofa.get_position_values("Source")
            assert sofa.validate().valid
        assert buffer.dimensions == ("M", "C", "I")
        assert buffer[1, 0, 0] == 4.0

    def test_receiver_count_disagrees_with_declared_dimension(
        self, tmp_path, raw_sofa_writer, directivity_layout
    ):
        directivity_layout["dimensions"]["X"] = 3
        directivity_layout["variables"]["ReceiverPosition"] = {
            "dims": ("X", "C"),
            "attrs": {"Type": "cartesian", "Units": "metre"},
        }
        path = raw_sofa_writer(
            tmp_path / "f.sofa", directivity_layout["dimensions"], directivity_layout["variables"]
        )
        with open_file(path) as sofa:
            with pytest.raises(ShapeMismatch) as exc_info:
                sofa.get_position_values("Receiver")
        assert isinstance(exc_info.value, DimensionConflict)
        assert (exc_info.value.expected, exc_info.value.found) == (2, 3)

    def test_missing_position_values(self, directivity_path):
        with open_file(directivity_path) as sofa:
            with pytest.raises(MissingVariable):
                sofa.get_position_values("Emitter", "Up")


class TestSetPositionValues:
    def test_write_then_read_is_bit_identical(self, hrir_path):
        values = np.random.default_rng(7).normal(size=(3, 3))
        with open_file(hrir_path, mode="a") as sofa:
            sofa.set_position_values("Source", "Position", values)
        with open_file(hrir_path) as sofa:
            buffer = sofa.get_position_values("Source", ndim=2)
        assert buffer.values.tobytes() == values.astype(np.float64).tobytes()

    def test_flat_values_accepted(self, hrir_path):
        with open_file(hrir_path, mode="a") as sofa:
            sofa.set_position_values("Listener", "Position", [0.5, 0.25, 0.0])
            assert list(sofa.get_position_values("Listener")) == [0.5, 0.25, 0.0]

    def test_wrong_shape_rejected(self, hrir_path):
        with open_file(hrir_path, mode="a") as sofa:
            with pytest.raises(ShapeMismatch):
                sofa.set_position_values("Source", "Position", np.zeros((2, 3)))
            with pytest.raises(ShapeMismatch):
                sofa.set_position_values("Source", "Position", [1.0, 2.0])
