"""CLI tests: click's CliRunner against JSON files in a temporary directory."""

import pytest
from click.testing import CliRunner
from loguru import logger

from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.config import get_settings


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("STOREFRONT_USER", raising=False)
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()
    # The runner's stderr is closed once a test ends.
    logger.remove()


def _invoke(runner, *args, user="alice", admin=False):
    prefix = ["--user", user] if user else []
    if admin:
        prefix.append("--admin")
    return runner.invoke(cli, [*prefix, *args])


def _seed(runner):
    result = _invoke(
        runner, "product", "add", "--name", "Widget", "--sku", "W-1",
        "--price", "50.00", "--stock", "10",
    )
    assert result.exit_code == 0, result.output


def _place(runner, user="alice"):
    return _invoke(
        runner, "order", "place",
        "--name", "Alice", "--street", "1 Main St", "--city", "Springfield",
        "--postal-code", "62701", "--country", "US",
        user=user,
    )


class TestProductCommands:

    def test_add_and_list(self, runner):
        _seed(runner)
        result = _invoke(runner, "product", "list")
        assert result.exit_code == 0
        assert "Widget" in result.output
        assert "$50.00" in result.output

    def test_duplicate_sku(self, runner):
        _seed(runner)
        result = _invoke(
            runner, "product", "add", "--name", "Other", "--sku", "W-1", "--price", "1.00"
        )
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_review(self, runner):
        _seed(runner)
        result = _invoke(runner, "product", "review", "--id", "1", "--rating", "4", "--comment", "Nice")
        assert result.exit_code == 0
        assert "rated 4.0" in result.output


class TestCartCommands:

    def test_empty_cart(self, runner):
        result = _invoke(runner, "cart", "show")
        assert result.exit_code == 0
        assert "Cart is empty." in result.output

    def test_add_shows_total(self, runner):
        _seed(runner)
        result = _invoke(runner, "cart", "add", "--product", "1", "--quantity", "2")
        assert result.exit_code == 0
        assert "$100.00" in result.output

    def test_add_beyond_stock(self, runner):
        _seed(runner)
        result = _invoke(runner, "cart", "add", "--product", "1", "--quantity", "11")
        assert result.exit_code != 0
        assert "Insufficient stock" in result.output

    def test_requires_user(self, runner):
        result = _invoke(runner, "cart", "show", user=None)
        assert result.exit_code != 0
        assert "--user" in result.output

    def test_update_and_clear(self, runner):
        _seed(runner)
        _invoke(runner, "cart", "add", "--product", "1")
        result = _invoke(runner, "cart", "update", "--product", "1", "--quantity", "3")
        assert "$150.00" in result.output

        result = _invoke(runner, "cart", "clear")
        assert result.exit_code == 0
        assert "Cart cleared." in result.output
        assert "Cart is empty." in _invoke(runner, "cart", "show").output


class TestOrderCommands:

    def test_place_order(self, runner):
        _seed(runner)
        _invoke(runner, "cart", "add", "--product", "1", "--quantity", "3")

        result = _place(runner)

        assert result.exit_code == 0, result.output
        assert "Order #1 placed." in result.output
        assert "$165.00" in result.output
        assert "Cart is empty." in _invoke(runner, "cart", "show").output

    def test_place_with_empty_cart(self, runner):
        result = _place(runner)
        assert result.exit_code != 0
        assert "Cart is empty" in result.output

    def test_show_and_list(self, runner):
        _seed(runner)
        _invoke(runner, "cart", "add", "--product", "1")
        _place(runner)

        shown = _invoke(runner, "order", "show", "--id", "1")
        assert shown.exit_code == 0
        assert "status=pending" in shown.output

        listed = _invoke(runner, "order", "list")
        assert "alice" in listed.output

    def test_other_user_cannot_view(self, runner):
        _seed(runner)
        _invoke(runner, "cart", "add", "--product", "1")
        _place(runner)

        result = _invoke(runner, "order", "show", "--id", "1", user="bob")
        assert result.exit_code != 0
        assert "Not authorized" in result.output

    def test_admin_status_update(self, runner):
        _seed(runner)
        _invoke(runner, "cart", "add", "--product", "1")
        _place(runner)

        denied = _invoke(runner, "order", "status", "--id", "1", "--status", "shipped")
        assert denied.exit_code != 0

        result = _invoke(
            runner, "order", "status", "--id", "1", "--status", "shipped",
            user="root", admin=True,
        )
        assert result.exit_code == 0
        assert "is now shipped" in result.output

    def test_cancel_restocks(self, runner):
        _seed(runner)
        _invoke(runner, "cart", "add", "--product", "1", "--quantity", "4")
        _place(runner)

        result = _invoke(runner, "order", "cancel", "--id", "1")

        assert result.exit_code == 0
        assert "Order #1 cancelled." in result.output
        listing = _invoke(runner, "product", "list").output
        assert " 10 " in listing
