"""Rule parameter normalization and validation tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from depenforcer.config.schema import (
    RuleParameters,
    ScopeConfig,
    parse_flag,
    resolve_scope_config,
)
from depenforcer.errors import ConfigurationError
from depenforcer.model import BuildSession, Module
from depenforcer.rules.depend_on_all import KIND_CONFIGURATION, evaluate

REACTOR = [
    Module("com.github.mikkoi", "test-artifact", "1.0.0-SNAPSHOT"),
    Module("com.github.mikkoi", "test-artifact-a", "0.1.0"),
    Module("com.github.mikkoi", "test-artifact-b", "0.1.0"),
]


def test_defaults() -> None:
    """Unset parameters resolve to include-everything."""
    config = resolve_scope_config(RuleParameters(), REACTOR)
    assert config.includes == ("*",)
    assert config.excludes == ()
    assert config.error_if_unknown_selector is False
    assert config.include_root_module is False
    assert config.describe() == (
        "DependOnAllProjects[includes=[*];excludes=[];"
        "includeRootProject=false;errorIfUnknownProject=false]"
    )


def test_single_empty_string_list_means_unset() -> None:
    """Injection layers encode an unset list as ``[""]``."""
    config = resolve_scope_config(RuleParameters(includes=[""], excludes=[""]), REACTOR)
    assert config.includes == ("*",)
    assert config.excludes == ()


def test_none_params_behave_like_defaults() -> None:
    assert resolve_scope_config(None, REACTOR) == ScopeConfig()


def test_explicit_values_are_kept_in_order() -> None:
    params = RuleParameters(
        includes=["*", "com.github.mikkoi:*"],
        excludes=["com.github.mikkoi:test-artifact-b"],
        errorIfUnknownProject="true",
        includeRootProject="true",
    )
    config = resolve_scope_config(params, REACTOR)
    assert config.describe() == (
        "DependOnAllProjects[includes=[*, com.github.mikkoi:*];"
        "excludes=[com.github.mikkoi:test-artifact-b];"
        "includeRootProject=true;errorIfUnknownProject=true]"
    )


@pytest.mark.parametrize(
    ("selectors", "message"),
    [
        ([None], "Failure in parameter 'includes'. String is null"),
        (["a", ""], "Failure in parameter 'includes'. String is empty"),
        ([" \t"], "Failure in parameter 'includes'. String contains only whitespace: ' \t'"),
        (["a:b:c:d"], "Failure in parameter 'includes'. String is invalid"),
    ],
)
def test_malformed_include(selectors, message: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_scope_config(RuleParameters(includes=selectors), REACTOR)
    assert str(excinfo.value) == message


def test_selector_that_is_not_a_valid_pattern_is_rejected() -> None:
    """Regex characters other than '.' and '*' pass through and must compile."""
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_scope_config(RuleParameters(includes=["lib("]), REACTOR)
    assert str(excinfo.value) == "Failure in parameter 'includes'. String is invalid"


def test_uncompilable_selector_is_a_configuration_result() -> None:
    """Evaluation reports a bad selector instead of raising while scanning."""
    session = BuildSession(reactor=tuple(REACTOR), current=REACTOR[0], top_level=REACTOR[0])
    result = evaluate(session, RuleParameters(excludes=["lib["]))

    assert not result.passed
    assert result.kind == KIND_CONFIGURATION
    assert result.message == "Failure in parameter 'excludes'. String is invalid"


def test_malformed_exclude_names_parameter() -> None:
    with pytest.raises(ConfigurationError, match="parameter 'excludes'. String is null"):
        resolve_scope_config(RuleParameters(excludes=["x", None]), REACTOR)


def test_unknown_project_only_checked_when_enabled() -> None:
    params = RuleParameters(excludes=["com.github.mikkoi:non-existing-project"])
    resolve_scope_config(params, REACTOR)

    params = params.model_copy(update={"error_if_unknown_project": "true"})
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_scope_config(params, REACTOR)
    assert str(excinfo.value) == (
        "Failure in parameter 'excludes'. "
        "Project 'com.github.mikkoi:non-existing-project' not found in build"
    )


def test_wildcard_selectors_skip_unknown_check() -> None:
    params = RuleParameters(includes=["nothing-*"], error_if_unknown_project="true")
    assert resolve_scope_config(params, REACTOR).includes == ("nothing-*",)


def test_known_selectors_pass_unknown_check() -> None:
    params = RuleParameters(
        includes=["test-artifact-a", "com.github.mikkoi:test-artifact-b:jar"],
        error_if_unknown_project="true",
    )
    config = resolve_scope_config(params, REACTOR)
    assert config.includes == ("test-artifact-a", "com.github.mikkoi:test-artifact-b:jar")


def test_unknown_check_skipped_without_reactor() -> None:
    params = RuleParameters(includes=["ghost"], error_if_unknown_project="true")
    assert resolve_scope_config(params).includes == ("ghost",)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, False), ("", False), ("false", False), ("true", True)],
)
def test_parse_flag(value, expected: bool) -> None:
    assert parse_flag("includeRootProject", value) is expected


@pytest.mark.parametrize("value", ["TRUE", "yes", "1", " true"])
def test_parse_flag_rejects_other_values(value: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        parse_flag("errorIfUnknownProject", value)
    assert str(excinfo.value) == (
        "Failure in parameter 'errorIfUnknownProject'. "
        f"Must be 'true' or 'false': '{value}'"
    )


def test_boolean_flags_are_coerced_to_strings() -> None:
    params = RuleParameters.model_validate(
        {"errorIfUnknownProject": True, "include_root_project": False}
    )
    assert params.error_if_unknown_project == "true"
    assert params.include_root_project == "false"


def test_comma_separated_selectors() -> None:
    params = RuleParameters.model_validate({"includes": "a,b:c"})
    assert params.includes == ["a", "b:c"]


def test_scope_config_is_frozen_and_never_empty() -> None:
    config = ScopeConfig()
    with pytest.raises(ValidationError):
        config.includes = ("x",)
    with pytest.raises(ValidationError):
        ScopeConfig(includes=())
