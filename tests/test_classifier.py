"""
Tests for dataset shape classification
"""

import pytest

from spielplan_api.classifier import Combined, FullSchedule, classify, is_full_schedule, unwrap_payload


def _match(home, away, **extra):
    return {"team_home": home, "team_away": away, **extra}


class TestClassify:

    def test_rounds_are_full_schedule(self):
        data = {
            "2024": [_match("A", "B"), _match("C", "D")],
            "2025": [_match("E", "F")],
        }
        result = classify(data)
        assert isinstance(result, FullSchedule)
        assert result.mode == "full-schedule"
        assert [r["team_home"] for r in result.records] == ["A", "C", "E"]

    def test_full_schedule_flattens_one_level(self):
        data = {"Vorrunde": [_match("A", "B")], "Pokal": _match("C", "D", round_name="1. Runde")}
        records = classify(data).records
        assert [r["team_home"] for r in records] == ["A", "C"]

    def test_full_schedule_drops_non_object_items(self):
        data = {"2024": [_match("A", "B"), "spielfrei", 3, None, _match("C", "D")]}
        records = classify(data).records
        assert [r["team_home"] for r in records] == ["A", "C"]

    def test_empty_mapping_is_full_schedule(self):
        result = classify({})
        assert result.mode == "full-schedule"
        assert result.records == []

    def test_combined(self):
        data = {
            "meetings_excerpt": {
                "meetings": [
                    {"2024-09-14": _match("A", "B"), "2024-09-15": _match("C", "D")},
                    {"2024-09-21": [_match("E", "F"), _match("G", "H")]},
                ]
            },
            "table": [{"table_rank": 1, "team_name": "A"}],
        }
        result = classify(data)
        assert isinstance(result, Combined)
        assert result.mode == "combined"
        assert [r["team_home"] for r in result.schedule] == ["A", "C", "E", "G"]
        assert result.standings == [{"table_rank": 1, "team_name": "A"}]

    def test_table_only(self):
        result = classify({"table": [{"table_rank": 1}]})
        assert result.mode == "combined"
        assert result.schedule is None
        assert result.standings == [{"table_rank": 1}]

    def test_empty_table_list_still_counts_as_standings(self):
        result = classify({"table": []})
        assert result.mode == "combined"
        assert result.standings == []

    @pytest.mark.parametrize("excerpt", [{"meetings": None}, {"meetings": "x"}, {}, "x", [1, 2]])
    def test_malformed_excerpt_is_none(self, excerpt):
        result = classify({"meetings_excerpt": excerpt, "table": []})
        assert result.schedule is None

    def test_malformed_table_is_none(self):
        result = classify({"meetings_excerpt": {"meetings": []}, "table": {"rank": 1}})
        assert result.schedule == []
        assert result.standings is None

    @pytest.mark.parametrize("value", [None, "", 0, False])
    def test_falsy_fields_count_as_absent(self, value):
        assert is_full_schedule({"table": value, "meetings_excerpt": value, "2024": []})

    @pytest.mark.parametrize("data", [None, [1, 2], "text", 42])
    def test_non_object_degrades_to_placeholders(self, data):
        result = classify(data)
        assert result.mode == "combined"
        assert result.schedule is None
        assert result.standings is None


class TestUnwrapPayload:

    def test_envelope(self):
        assert unwrap_payload({"data": {"table": []}}) == {"table": []}

    def test_bare(self):
        assert unwrap_payload({"table": []}) == {"table": []}

    def test_none(self):
        assert unwrap_payload(None) is None
