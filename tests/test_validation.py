"""
Tests for request validation and post-solve findings.
"""

import math
import pytest

from coilwind.calculator.errors import (
    ComputationError,
    NonFiniteValueError,
    ParameterValidationError,
)
from coilwind.calculator.validation import (
    Severity,
    ValidationMessage,
    check_request,
    check_result,
    validate_request,
)
from coilwind.calculator import calculate
from coilwind.enums import WindingMode, WindingPattern
from coilwind.io import WindingRequest


def _request(**overrides):
    data = {
        "pipe_diameter_mm": 20.0,
        "inner_diameter_mm": 500.0,
        "outer_diameter_mm": 800.0,
        "bundle_width_mm": 2000.0,
        "pipe_length_m": 750.0,
    }
    data.update(overrides)
    return WindingRequest(**data)


def _code(request):
    message = validate_request(request)
    return message.code if message is not None else None


class TestValidRequests:

    def test_coil_length_request_valid(self, coil_length_request):
        assert validate_request(coil_length_request) is None

    def test_end_position_request_valid(self, end_position_request):
        assert validate_request(end_position_request) is None

    def test_check_request_returns_request(self, coil_length_request):
        assert check_request(coil_length_request) is coil_length_request

    def test_minimum_offset_width_accepted(self):
        request = _request(bundle_width_mm=30.0, pattern=WindingPattern.EVEN_LAYERS_OFFSET)
        assert validate_request(request) is None

    def test_coil_mode_does_not_need_pipe_length(self):
        assert validate_request(_request(pipe_length_m=None)) is None

    def test_end_mode_does_not_need_outer_diameter(self):
        request = _request(mode=WindingMode.END_POSITION, outer_diameter_mm=None)
        assert validate_request(request) is None


class TestViolations:
    """Each precondition reports its own code and message."""

    @pytest.mark.parametrize("value", [0.0, -20.0, math.nan])
    def test_pipe_diameter_not_positive(self, value):
        message = validate_request(_request(pipe_diameter_mm=value))
        assert message.severity == Severity.ERROR
        assert message.code == "PIPE_DIAMETER_NOT_POSITIVE"
        assert message.message == "pipe diameter must be greater than 0"

    @pytest.mark.parametrize("value", [0.0, -1.0, math.nan])
    def test_inner_diameter_not_positive(self, value):
        assert _code(_request(inner_diameter_mm=value)) == "INNER_DIAMETER_NOT_POSITIVE"

    @pytest.mark.parametrize("value", [500.0, 600.0])
    def test_pipe_diameter_too_large(self, value):
        message = validate_request(_request(pipe_diameter_mm=value))
        assert message.code == "PIPE_DIAMETER_TOO_LARGE"
        assert message.message == "pipe diameter must be smaller than inner diameter"

    def test_outer_diameter_missing(self):
        assert _code(_request(outer_diameter_mm=None)) == "OUTER_DIAMETER_MISSING"

    @pytest.mark.parametrize("value", [500.0, 300.0, math.nan])
    def test_outer_diameter_too_small(self, value):
        assert _code(_request(outer_diameter_mm=value)) == "OUTER_DIAMETER_TOO_SMALL"

    def test_pipe_length_missing(self):
        request = _request(mode=WindingMode.END_POSITION, pipe_length_m=None)
        assert _code(request) == "PIPE_LENGTH_MISSING"

    @pytest.mark.parametrize("value", [0.0, -750.0])
    def test_pipe_length_not_positive(self, value):
        request = _request(mode=WindingMode.END_POSITION, pipe_length_m=value)
        assert _code(request) == "PIPE_LENGTH_NOT_POSITIVE"

    @pytest.mark.parametrize("mode", list(WindingMode))
    def test_bundle_width_not_positive(self, mode):
        assert _code(_request(mode=mode, bundle_width_mm=0.0)) == "BUNDLE_WIDTH_NOT_POSITIVE"

    def test_safety_factor_not_positive(self):
        request = _request(mode=WindingMode.END_POSITION, safety_factor=0.0)
        assert _code(request) == "SAFETY_FACTOR_NOT_POSITIVE"

    def test_safety_factor_ignored_for_coil_length(self):
        assert validate_request(_request(safety_factor=0.0)) is None

    @pytest.mark.parametrize("value", [0, -3])
    def test_pipes_per_layer_not_positive(self, value):
        request = _request(mode=WindingMode.END_POSITION, pipes_per_layer=value)
        message = validate_request(request)
        assert message.code == "PIPES_PER_LAYER_NOT_POSITIVE"
        assert message.message == "pipes per layer must be at least 1"

    def test_pipes_per_layer_ignored_for_coil_length(self):
        assert validate_request(_request(pipes_per_layer=0)) is None

    def test_one_pipe_per_layer_accepted(self):
        assert validate_request(_request(mode=WindingMode.END_POSITION, pipes_per_layer=1)) is None

    def test_bundle_narrower_than_pipe(self):
        message = validate_request(_request(bundle_width_mm=15.0))
        assert message.code == "BUNDLE_WIDTH_TOO_SMALL"
        assert "20 mm" in message.suggestion

    def test_offset_needs_one_and_a_half_pipes(self):
        request = _request(bundle_width_mm=28.0, pattern=WindingPattern.EVEN_LAYERS_OFFSET)
        message = validate_request(request)
        assert message.code == "BUNDLE_WIDTH_TOO_SMALL"
        assert "30 mm" in message.suggestion


class TestViolationOrder:
    """Only the first violated constraint is reported."""

    def test_pipe_diameter_before_inner_diameter(self):
        assert _code(_request(pipe_diameter_mm=0.0, inner_diameter_mm=0.0)) == "PIPE_DIAMETER_NOT_POSITIVE"

    def test_inner_diameter_before_size_comparison(self):
        assert _code(_request(inner_diameter_mm=-5.0)) == "INNER_DIAMETER_NOT_POSITIVE"

    def test_size_comparison_before_outer_diameter(self):
        request = _request(pipe_diameter_mm=600.0, outer_diameter_mm=None)
        assert _code(request) == "PIPE_DIAMETER_TOO_LARGE"

    def test_outer_diameter_before_bundle_width(self):
        request = _request(outer_diameter_mm=400.0, bundle_width_mm=0.0)
        assert _code(request) == "OUTER_DIAMETER_TOO_SMALL"

    def test_pipe_length_before_bundle_width(self):
        request = _request(mode=WindingMode.END_POSITION, pipe_length_m=0.0, bundle_width_mm=-1.0)
        assert _code(request) == "PIPE_LENGTH_NOT_POSITIVE"

    def test_bundle_width_before_safety_factor(self):
        request = _request(mode=WindingMode.END_POSITION, bundle_width_mm=0.0, safety_factor=0.0)
        assert _code(request) == "BUNDLE_WIDTH_NOT_POSITIVE"

    def test_same_request_same_message(self):
        request = _request(pipe_diameter_mm=-1.0, outer_diameter_mm=None)
        assert validate_request(request) == validate_request(request)

    def test_bundle_width_before_pipes_per_layer(self):
        request = _request(mode=WindingMode.END_POSITION, bundle_width_mm=0.0, pipes_per_layer=0)
        assert _code(request) == "BUNDLE_WIDTH_NOT_POSITIVE"

    def test_width_capacity_before_pipes_per_layer(self):
        request = _request(mode=WindingMode.END_POSITION, bundle_width_mm=10.0, pipes_per_layer=0)
        assert _code(request) == "BUNDLE_WIDTH_TOO_SMALL"


class TestCheckRequest:

    def test_raises_parameter_validation_error(self):
        with pytest.raises(ParameterValidationError) as exc_info:
            check_request(_request(inner_diameter_mm=0.0))
        error = exc_info.value
        assert error.code == "INNER_DIAMETER_NOT_POSITIVE"
        assert error.message == "inner diameter must be greater than 0"
        assert str(error) == error.message
        assert error.suggestion is not None

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            check_request(_request(pipe_diameter_mm=0.0))

    def test_validation_error_is_not_computation_error(self):
        with pytest.raises(ParameterValidationError) as exc_info:
            check_request(_request(pipe_diameter_mm=0.0))
        assert not isinstance(exc_info.value, ComputationError)

    def test_infinite_width_is_computation_error(self):
        with pytest.raises(NonFiniteValueError):
            check_request(_request(bundle_width_mm=math.inf))


class TestCheckResult:
    """Non-blocking findings after a solve."""

    def test_no_findings_for_normal_drum(self, coil_length_request):
        result = calculate(coil_length_request)
        assert check_result(coil_length_request, result) == []

    def test_single_layer_overflow_warns(self, small_drum_request):
        result = calculate(small_drum_request)
        messages = check_result(small_drum_request, result)
        assert [m.code for m in messages] == ["OUTER_DIAMETER_EXCEEDED"]
        assert messages[0].severity == Severity.WARNING
        assert "90 mm" in messages[0].message
        assert "80 mm" in messages[0].message

    def test_empty_even_layers_info(self):
        request = _request(bundle_width_mm=30.0)
        messages = check_result(request, calculate(request))
        assert any(
            m.code == "EMPTY_EVEN_LAYERS" and m.severity == Severity.INFO
            for m in messages
        )

    def test_no_empty_layer_info_for_offset(self):
        request = _request(bundle_width_mm=30.0, pattern=WindingPattern.EVEN_LAYERS_OFFSET)
        messages = check_result(request, calculate(request))
        assert all(m.code != "EMPTY_EVEN_LAYERS" for m in messages)

    def test_end_position_has_no_envelope_warning(self, end_position_request):
        result = calculate(end_position_request)
        assert check_result(end_position_request, result) == []

    def test_pipes_per_layer_wider_than_bundle_warns(self):
        request = _request(mode=WindingMode.END_POSITION, pipes_per_layer=150)
        result = calculate(request)
        messages = check_result(request, result)
        assert [m.code for m in messages] == ["PIPES_PER_LAYER_EXCEEDS_WIDTH"]
        assert messages[0].severity == Severity.WARNING
        assert "3000 mm" in messages[0].message

    def test_pipes_per_layer_within_bundle_no_warning(self):
        request = _request(mode=WindingMode.END_POSITION, pipes_per_layer=50)
        assert check_result(request, calculate(request)) == []

    def test_single_pipe_per_layer_info(self):
        request = _request(mode=WindingMode.END_POSITION, pipe_length_m=5.0, pipes_per_layer=1)
        result = calculate(request)
        assert result.number_of_layers == 5
        assert result.number_of_rotations == pytest.approx(2.75)
        assert [m.code for m in check_result(request, result)] == ["EMPTY_EVEN_LAYERS"]

    def test_thin_pipe_height_rounds_to_zero(self):
        """Sub-millimetre bundle height is reported instead of passing silently."""
        request = _request(
            mode=WindingMode.END_POSITION, pipe_diameter_mm=0.4, pipe_length_m=1.0
        )
        result = calculate(request)
        assert result.bundle_height_mm == 0
        assert result.outer_diameter_mm == 500
        messages = check_result(request, result)
        assert [m.code for m in messages] == ["BUNDLE_HEIGHT_ROUNDED_TO_ZERO"]
        assert messages[0].severity == Severity.INFO
        assert "0.4 mm" in messages[0].message

    def test_findings_never_errors(self, small_drum_request):
        messages = check_result(small_drum_request, calculate(small_drum_request))
        assert all(isinstance(m, ValidationMessage) for m in messages)
        assert all(m.severity != Severity.ERROR for m in messages)
