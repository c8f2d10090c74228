"""Unit tests for parameter bag merging and typed parameter decoding."""

#run with "python -m pytest components/rest_cli_interface/tests -v"

from dataclasses import dataclass

import pytest

from rest_cli_interface.errors import InvalidParameterError, MissingParameterError, MissingPrimaryKeyError
from rest_cli_interface.params import (
    ActionParams,
    merge_bags,
    param,
    parse_pairs,
    to_bool,
    to_int,
    to_list,
    to_mapping,
    to_str,
)


@dataclass(frozen=True)
class SampleParams(ActionParams):
    key: str = param("index", primary=True, required=True, convert=to_str)
    query: dict | None = param("query", convert=to_mapping)
    size: int = param("size", default=100, convert=to_int)
    tags: list | None = param("tags", convert=to_list)
    flag: bool = param("flag", default=False, convert=to_bool)


#--------------------------- parse_pairs / merge_bags --------------------------

def test_parse_pairs_decodes_only_structured_json_values_sa():
    bag = parse_pairs(
        ["size=10", "flag=true", 'query={"match_all": {}}', 'tags=["a", "b"]', 'quoted="x y"', "name=plain text"]
    )

    assert bag == {
        "size": "10",
        "flag": "true",
        "query": {"match_all": {}},
        "tags": ["a", "b"],
        "quoted": "x y",
        "name": "plain text",
    }


def test_parse_pairs_keeps_scalars_as_typed_sa():
    # Setup: values that JSON would turn into a float, a bool and a NaN
    bag = parse_pairs(["id=1e3", "body=true", "Id=NaN", "ref=007"])

    # Assert: the text survives untouched
    assert bag == {"id": "1e3", "body": "true", "Id": "NaN", "ref": "007"}


def test_parse_pairs_keeps_malformed_json_as_text_sa():
    assert parse_pairs(["q={not json"]) == {"q": "{not json"}


def test_text_values_reach_typed_fields_through_converters_sa():
    params = SampleParams.from_bag(
        "search", parse_pairs(["size=7", "flag=false", 'query={"term": {"a": 1}}', "tags=x,y"]), "1e3"
    )

    assert params == SampleParams(key="1e3", query={"term": {"a": 1}}, size=7, tags=["x", "y"], flag=False)


def test_parse_pairs_keeps_everything_after_first_equals_sa():
    bag = parse_pairs(["jql=project = MS"])

    assert bag == {"jql": "project = MS"}


def test_parse_pairs_rejects_pair_without_equals_sa():
    with pytest.raises(InvalidParameterError):
        parse_pairs(["size"])


def test_merge_bags_json_text_wins_on_collision_sa():
    # Setup: both sources name "size" and only one names the other keys
    structured = {"size": 10, "from": 5}
    json_text = '{"size": 25, "query": {"match_all": {}}}'

    merged = merge_bags(structured, json_text)

    # Assert: the JSON text was merged second so its size wins
    assert merged == {"size": 25, "from": 5, "query": {"match_all": {}}}


def test_merge_bags_does_not_mutate_structured_source_sa():
    structured = {"size": 10}
    merge_bags(structured, '{"size": 1}')

    assert structured == {"size": 10}


def test_merge_bags_with_no_sources_sa():
    assert merge_bags(None, None) == {}


def test_merge_bags_rejects_invalid_json_sa():
    with pytest.raises(InvalidParameterError):
        merge_bags({}, "{not json")


def test_merge_bags_rejects_non_object_json_sa():
    with pytest.raises(InvalidParameterError):
        merge_bags({}, "[1, 2]")


#--------------------------- ActionParams.from_bag --------------------------

def test_from_bag_applies_defaults_sa():
    params = SampleParams.from_bag("search", {}, "logs")

    assert params.key == "logs"
    assert params.size == 100
    assert params.query is None
    assert params.flag is False


def test_from_bag_explicit_values_override_defaults_sa():
    params = SampleParams.from_bag("search", {"size": "7", "tags": "a, b", "flag": "yes"}, "logs")

    assert params.size == 7
    assert params.tags == ["a", "b"]
    assert params.flag is True


def test_from_bag_ignores_unknown_keys_sa():
    params = SampleParams.from_bag("search", {"unknown": 1, "Size": 3}, "logs")

    # keys are case-sensitive, so "Size" is not "size"
    assert params.size == 100


def test_from_bag_missing_primary_key_sa():
    with pytest.raises(MissingPrimaryKeyError) as exc_info:
        SampleParams.from_bag("search", {}, None)

    assert exc_info.value.parameter == "index"
    assert exc_info.value.action == "search"


def test_from_bag_missing_required_parameter_names_parameter_and_action_sa():
    @dataclass(frozen=True)
    class NeedsDoc(ActionParams):
        doc: dict = param("doc", required=True, convert=to_mapping)

    with pytest.raises(MissingParameterError) as exc_info:
        NeedsDoc.from_bag("update", {"other": 1})

    assert "doc" in str(exc_info.value)
    assert "update" in str(exc_info.value)


def test_from_bag_invalid_value_raises_invalid_parameter_sa():
    with pytest.raises(InvalidParameterError):
        SampleParams.from_bag("search", {"size": "ten"}, "logs")


def test_describe_lists_required_and_optional_keys_sa():
    required, optional = SampleParams.describe()

    assert required == []
    assert optional == ["query", "size", "tags", "flag"]
    assert SampleParams.primary_label() == ("index", True)


#--------------------------- converters --------------------------

def test_to_int_rejects_bool_sa():
    with pytest.raises(ValueError):
        to_int(True)


def test_to_bool_rejects_garbage_sa():
    with pytest.raises(ValueError):
        to_bool("maybe")


def test_to_mapping_accepts_json_text_sa():
    assert to_mapping('{"a": 1}') == {"a": 1}


def test_to_str_turns_numbers_into_text_sa():
    assert to_str(123456) == "123456"


def test_to_str_renders_json_booleans_as_json_text_sa():
    assert to_str(True) == "true"
    assert to_str("true") == "true"


def test_to_list_accepts_json_array_text_sa():
    assert to_list('["a", "b,c"]') == ["a", "b,c"]


#--------------------------- validate hook --------------------------

@dataclass(frozen=True)
class RangeParams(ActionParams):
    low: int | None = param("low", convert=to_int)
    high: int | None = param("high", convert=to_int)

    def validate(self, action):
        if self.low is None and self.high is None:
            raise MissingParameterError("low or high", action)


def test_from_bag_runs_validate_with_the_action_name_sa():
    with pytest.raises(MissingParameterError) as exc_info:
        RangeParams.from_bag("range", {})

    assert exc_info.value.parameter == "low or high"
    assert exc_info.value.action == "range"


def test_from_bag_returns_instance_that_passes_validate_sa():
    assert RangeParams.from_bag("range", {"high": "9"}) == RangeParams(high=9)
