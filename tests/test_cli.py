"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from pagecloner.cli import main
from pagecloner.service import PageClonerService


@pytest.fixture
def service(fake_client, template_store, config):
    return PageClonerService(fake_client, template_store, config)


@pytest.fixture
def invoke(service):
    runner = CliRunner()

    def _invoke(*args):
        return runner.invoke(main, list(args), obj={"service": service})

    return _invoke


def test_containers(invoke):
    result = invoke("containers")
    assert result.exit_code == 0
    assert "Engineering" in result.output


def test_crawl_json(invoke):
    result = invoke("crawl", "--json")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["totalCount"] == 6


def test_crawl_reports_truncation(invoke):
    result = invoke("crawl", "--max-documents", "1")
    assert result.exit_code == 0
    assert "Stopped at 1 pages." in result.output


def test_capture_by_id(invoke, template_store):
    result = invoke("capture", "100", "--name", "Status")
    assert result.exit_code == 0
    assert "captured: Status" in result.output
    assert len(template_store) == 1


def test_capture_missing_page(invoke):
    result = invoke("capture", "31337")
    assert result.exit_code == 2
    assert "not found" in result.output


def test_templates_listing(invoke, stored_template):
    result = invoke("templates")
    assert result.exit_code == 0
    assert stored_template.id in result.output


def test_delete_template(invoke, stored_template, template_store):
    result = invoke("delete-template", stored_template.id)
    assert result.exit_code == 0
    assert not template_store.exists(stored_template.id)


def test_suggest(invoke):
    result = invoke("suggest", "Report March 2026", "Report April 2026", "--count", "3")
    assert result.exit_code == 0
    assert "Report May 2026" in result.output


def test_generate_all_created(invoke, stored_template, fake_client):
    result = invoke(
        "generate", stored_template.id, "TEAM",
        "--mode", "monthly", "--base-title", "Budget", "--count", "2",
        "--start-month", "December", "--start-year", "2025",
    )
    assert result.exit_code == 0
    assert [s.title for s in fake_client.created] == ["Budget - December 2025", "Budget - January 2026"]
    assert "Successfully created 2 page(s)" in result.output


def test_generate_partial_failure_exits_one(invoke, stored_template, fake_client):
    fake_client.fail_titles.add("B")
    result = invoke("generate", stored_template.id, "TEAM", "--title", "A", "--title", "B")
    assert result.exit_code == 1
    assert "1 of 2 pages created, 1 failed" in result.output


def test_generate_under_new_parent_json(invoke, stored_template):
    result = invoke(
        "generate", stored_template.id, "OPS", "--title", "Postmortem",
        "--organization", "create-new-parent-then-children", "--new-parent-title", "Incidents",
        "--json",
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["parentId"] == "1001"
    assert data["createdCount"] == 1


def test_generate_rejects_titles_and_mode_together(invoke, stored_template, fake_client):
    result = invoke("generate", stored_template.id, "TEAM", "--title", "A", "--mode", "numbered")
    assert result.exit_code == 2
    assert fake_client.created == []


def test_generate_unknown_container(invoke, stored_template):
    result = invoke("generate", stored_template.id, "NOPE", "--title", "A")
    assert result.exit_code == 2
    assert "Could not start" in result.output
