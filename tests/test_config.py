"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior and dictionary loading.
"""

from threading import Thread

import pytest

from litscript import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from litscript.links import LinkMergePolicy


@pytest.fixture(autouse=True)
def _default_config():
    reset_parse_config()
    yield
    reset_parse_config()


class TestParseConfigDataclass:
    """ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.defined_symbols == frozenset()
        assert config.link_merge_policy is LinkMergePolicy.LAST_WINS
        assert config.markdown_plugins == ()

    def test_frozen(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.defined_symbols = frozenset({"X"})  # type: ignore[misc]

    def test_equality(self) -> None:
        assert ParseConfig(markdown_plugins=("table",)) == ParseConfig(markdown_plugins=("table",))


class TestFromDict:
    """ParseConfig.from_dict coercion."""

    def test_coerces_collections(self) -> None:
        config = ParseConfig.from_dict(
            {"defined_symbols": ["DEBUG", "DOCS"], "markdown_plugins": ["table"]}
        )
        assert config.defined_symbols == frozenset({"DEBUG", "DOCS"})
        assert config.markdown_plugins == ("table",)

    def test_policy_by_value(self) -> None:
        config = ParseConfig.from_dict({"link_merge_policy": "first"})
        assert config.link_merge_policy is LinkMergePolicy.FIRST_WINS

    def test_policy_by_member(self) -> None:
        config = ParseConfig.from_dict({"link_merge_policy": LinkMergePolicy.LAST_WINS})
        assert config.link_merge_policy is LinkMergePolicy.LAST_WINS

    def test_unknown_keys_ignored(self) -> None:
        assert ParseConfig.from_dict({"tables_enabled": True}) == ParseConfig()

    def test_invalid_policy(self) -> None:
        with pytest.raises(ValueError):
            ParseConfig.from_dict({"link_merge_policy": "middle"})


class TestContextVar:
    """get/set/reset and the context manager."""

    def test_default(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        config = ParseConfig(defined_symbols=frozenset({"X"}))
        set_parse_config(config)
        assert get_parse_config() is config
        reset_parse_config()
        assert get_parse_config() == ParseConfig()

    def test_context_restores(self) -> None:
        outer = ParseConfig(markdown_plugins=("math",))
        inner = ParseConfig(markdown_plugins=("table",))
        set_parse_config(outer)
        with parse_config_context(inner):
            assert get_parse_config() is inner
        assert get_parse_config() is outer

    def test_context_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), parse_config_context(ParseConfig(markdown_plugins=("x",))):
            raise RuntimeError("boom")
        assert get_parse_config() == ParseConfig()


class TestThreadIsolation:
    """Each thread sees its own configuration."""

    def test_threads_do_not_share_config(self) -> None:
        seen: dict[int, frozenset[str]] = {}

        def worker(index: int) -> None:
            set_parse_config(ParseConfig(defined_symbols=frozenset({f"T{index}"})))
            seen[index] = get_parse_config().defined_symbols

        threads = [Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert seen == {i: frozenset({f"T{i}"}) for i in range(8)}
        assert get_parse_config() == ParseConfig()
