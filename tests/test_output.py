"""
Tests for output formatters (JSON, Markdown, summary).
"""

import json
import math
import pytest

from coilwind.calculator import calculate, check_result
from coilwind.calculator.output import format_value, to_json, to_markdown, to_summary
from coilwind.io import SCHEMA_VERSION


@pytest.fixture
def coil_result(coil_length_request):
    return calculate(coil_length_request)


@pytest.fixture
def end_result(end_position_request):
    return calculate(end_position_request)


class TestFormatValue:

    def test_three_significant_figures(self):
        assert format_value(123.456, "m") == "123 m"
        assert format_value(2.5, "m") == "2.50 m"

    def test_zero_uses_scientific(self):
        assert format_value(0, "mm") == "0.00e+0 mm"

    def test_large_values_use_scientific(self):
        assert format_value(1000000, "Hz") == "1.00e+6 Hz"
        assert format_value(-2500000, "mm") == "-2.50e+6 mm"

    def test_tiny_values_use_scientific(self):
        assert format_value(0.000001, "F") == "1.00e-6 F"
        assert format_value(1e-7, "m") == "1.00e-7 m"

    def test_significant_figures_exponent(self):
        """Fixed-point formatting that needs an exponent keeps it short."""
        assert format_value(1603.425, "m") == "1.60e+3 m"
        assert format_value(1603.4, "m", precision=1) == "2e+3 m"

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_is_invalid(self, value):
        assert format_value(value, "m") == "Invalid"

    def test_precision(self):
        assert format_value(1603.4, "m", precision=5) == "1603.4 m"


class TestToJson:

    def test_structure(self, coil_result):
        data = json.loads(to_json(coil_result))
        assert data["schema_version"] == SCHEMA_VERSION
        assert data["result"]["mode"] == "coil_length"
        assert data["result"]["pattern"] == "uneven_layers"
        assert data["result"]["coil_length_m"] == pytest.approx(1603.425)
        assert data["result"]["number_of_layers"] == 8
        assert "request" not in data
        assert "messages" not in data

    def test_includes_request(self, end_result, end_position_request):
        data = json.loads(to_json(end_result, request=end_position_request))
        assert data["request"]["pipe_length_m"] == 750.0
        assert data["request"]["mode"] == "end_position"
        assert "outer_diameter_mm" not in data["request"]
        assert data["result"]["pipes_on_last_layer"] == pytest.approx(17.0)

    def test_includes_messages(self, small_drum_request):
        result = calculate(small_drum_request)
        messages = check_result(small_drum_request, result)
        data = json.loads(to_json(result, messages=messages))
        assert data["messages"][0]["severity"] == "warning"
        assert data["messages"][0]["code"] == "OUTER_DIAMETER_EXCEEDED"

    def test_indent(self, coil_result):
        assert "\n" not in to_json(coil_result, indent=None)


class TestToMarkdown:

    def test_coil_length_report(self, coil_result, coil_length_request):
        md = to_markdown(coil_result, request=coil_length_request)
        assert md.startswith("# Coil Length Calculation")
        assert "## Parameters" in md
        assert "| Pattern | BB1 (uneven_layers) |" in md
        assert "| Coil Length | 1603.425 m |" in md
        assert "| Outer Diameter | 782 mm |" in md
        assert "*Generated by Coilwind Calculator*" in md

    def test_end_position_report(self, end_result):
        md = to_markdown(end_result)
        assert md.startswith("# Winding End Position")
        assert "## Parameters" not in md
        assert "| Pipes on Last Layer | 17.00 / 100 |" in md
        assert "| Rotations | 415.00 |" in md
        assert "| Bundle Height | 89 mm |" in md

    def test_warnings_section(self, small_drum_request):
        result = calculate(small_drum_request)
        md = to_markdown(result, messages=check_result(small_drum_request, result))
        assert "### Warnings" in md
        assert "**OUTER_DIAMETER_EXCEEDED**" in md
        assert "### Information" not in md

    def test_safety_factor_only_when_set(self, end_position_request):
        result = calculate(end_position_request)
        assert "Safety Factor" not in to_markdown(result, request=end_position_request)

        request = end_position_request.model_copy(update={"safety_factor": 1.1})
        md = to_markdown(calculate(request), request=request)
        assert "| Safety Factor (G) | 1.1 |" in md

    def test_pipes_per_layer_row(self, end_position_request):
        assert "Pipes per Layer" not in to_markdown(
            calculate(end_position_request), request=end_position_request
        )

        request = end_position_request.model_copy(update={"pipes_per_layer": 50})
        md = to_markdown(calculate(request), request=request)
        assert "| Pipes per Layer | 50 |" in md
        assert "| Pipes on Last Layer | 29.25 / 49 |" in md


class TestToSummary:

    def test_coil_length_summary(self, coil_result):
        summary = to_summary(coil_result)
        assert "Coil Length (BB1)" in summary
        assert "Coil length:     1603.425 m" in summary
        assert "Outer diameter:  782 mm" in summary
        assert "Layers:          8" in summary

    def test_end_position_summary(self, end_result):
        summary = to_summary(end_result)
        assert "End Position (BB1)" in summary
        assert "Last layer:      17.00 / 100 pipes" in summary
        assert "Rotations:       415.00" in summary
        assert "Bundle height:   89 mm" in summary
