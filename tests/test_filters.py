"""Tests for project filters and the filter chain."""

import json
import logging
from unittest.mock import MagicMock

import pytest

from filters import (
    FilterChain,
    FilterConstructionError,
    GitlabNamespaceFilter,
    IgnoreRegexpFilter,
    IncludeIfHasFileFilter,
    ProjectFilter,
    ProjectTypeFilter,
)
from repository.errors import RepositoryFileNotFound, TransportError
from repository.models import Project


def make_project(name="acme/widget", **kwargs):
    defaults = {
        "id": 1,
        "http_url": f"https://gitlab.example.com/{name}.git",
        "default_branch": "main",
    }
    defaults.update(kwargs)
    return Project(name=name, **defaults)


class StubFilter(ProjectFilter):
    """Filter double recording how often it was called."""

    def __init__(self, accept):
        self.accept = accept
        self.calls = 0

    @property
    def description(self):
        return f"stub({self.accept})"

    def is_accepted(self, project):
        self.calls += 1
        return self.accept


class TestIgnoreRegexpFilter:
    """Test regexp based exclusion."""

    def test_rejects_matching_name(self):
        assert IgnoreRegexpFilter("^foo").is_accepted(make_project("foobar")) is False

    def test_accepts_non_matching_name(self):
        assert IgnoreRegexpFilter("^foo").is_accepted(make_project("barfoo")) is True

    def test_matches_qualified_name(self):
        project_filter = IgnoreRegexpFilter("(^phpstorm|^typo3/library)")
        assert project_filter.is_accepted(make_project("typo3/library-core")) is False
        assert project_filter.is_accepted(make_project("typo3/cms")) is True

    def test_invalid_pattern_fails_fast(self):
        with pytest.raises(FilterConstructionError):
            IgnoreRegexpFilter("(unclosed")

    @pytest.mark.parametrize("pattern", [123, None, ["^foo"]])
    def test_non_string_pattern_fails_fast(self, pattern):
        with pytest.raises(FilterConstructionError):
            IgnoreRegexpFilter(pattern)


class TestIncludeIfHasFileFilter:
    """Test file existence based inclusion."""

    def test_accepts_when_file_exists(self):
        client = MagicMock()
        client.has_file.return_value = True
        project = make_project()

        assert IncludeIfHasFileFilter(client, ".satisinclude").is_accepted(project) is True
        client.has_file.assert_called_once_with(project, ".satisinclude", "main")
        client.get_raw_file.assert_not_called()

    def test_rejects_when_file_missing(self):
        client = MagicMock()
        client.has_file.return_value = False

        assert IncludeIfHasFileFilter(client, ".satisinclude").is_accepted(make_project()) is False

    def test_transport_error_rejects_project(self):
        client = MagicMock()
        client.has_file.side_effect = TransportError("boom")

        assert IncludeIfHasFileFilter(client, ".satisinclude").is_accepted(make_project()) is False

    def test_requires_filename(self):
        with pytest.raises(FilterConstructionError):
            IncludeIfHasFileFilter(MagicMock(), "")


class TestProjectTypeFilter:
    """Test declared type inclusion."""

    def test_uses_snapshot_type_without_network(self):
        client = MagicMock()
        project_filter = ProjectTypeFilter("library", client)

        assert project_filter.is_accepted(make_project(project_type="library")) is True
        assert project_filter.is_accepted(make_project(project_type="project")) is False
        client.get_raw_file.assert_not_called()

    def test_reads_type_from_manifest(self):
        client = MagicMock()
        client.get_raw_file.return_value = json.dumps({"name": "acme/widget", "type": "library"}).encode()

        assert ProjectTypeFilter("library", client).is_accepted(make_project()) is True

    def test_comparison_is_case_sensitive(self):
        client = MagicMock()
        client.get_raw_file.return_value = b'{"type": "Library"}'

        assert ProjectTypeFilter("library", client).is_accepted(make_project()) is False

    def test_missing_manifest_rejects(self):
        client = MagicMock()
        client.get_raw_file.side_effect = RepositoryFileNotFound("composer.json", "main")

        assert ProjectTypeFilter("library", client).is_accepted(make_project()) is False

    def test_malformed_manifest_rejects(self):
        client = MagicMock()
        client.get_raw_file.return_value = b"{not json"

        assert ProjectTypeFilter("library", client).is_accepted(make_project()) is False


class TestGitlabNamespaceFilter:
    """Test namespace allow-list inclusion."""

    def test_accepts_by_id(self):
        project = make_project(namespace_id=2, namespace_name="Other")
        assert GitlabNamespaceFilter("2,Diaspora").is_accepted(project) is True

    def test_accepts_by_name(self):
        project = make_project(namespace_id=7, namespace_name="Diaspora")
        assert GitlabNamespaceFilter("2,Diaspora").is_accepted(project) is True

    def test_rejects_unlisted(self):
        project = make_project(namespace_id=3, namespace_name="Other")
        assert GitlabNamespaceFilter("2,Diaspora").is_accepted(project) is False

    def test_trims_entries(self):
        project = make_project(namespace_id=3, namespace_name="Diaspora")
        assert GitlabNamespaceFilter(" 2 , Diaspora ").is_accepted(project) is True

    def test_name_is_case_sensitive(self):
        project = make_project(namespace_id=3, namespace_name="diaspora")
        assert GitlabNamespaceFilter("2,Diaspora").is_accepted(project) is False

    def test_empty_list_fails_fast(self):
        with pytest.raises(FilterConstructionError):
            GitlabNamespaceFilter(" , ")


class TestFilterChain:
    """Test conjunction and short-circuit semantics."""

    def test_empty_chain_accepts_everything(self):
        assert FilterChain().is_accepted(make_project()) is True

    def test_all_accepting(self):
        chain = FilterChain([StubFilter(True), StubFilter(True)])
        assert chain.is_accepted(make_project()) is True

    def test_any_rejecting(self):
        chain = FilterChain([StubFilter(True), StubFilter(False)])
        assert chain.is_accepted(make_project()) is False

    def test_short_circuits_after_rejection(self):
        first, second = StubFilter(False), StubFilter(True)
        chain = FilterChain().add_filter(first).add_filter(second)

        assert chain.is_accepted(make_project()) is False
        assert first.calls == 1
        assert second.calls == 0

    def test_evaluation_follows_insertion_order(self):
        order = []

        class Recording(StubFilter):
            def __init__(self, label):
                super().__init__(True)
                self.label = label

            def is_accepted(self, project):
                order.append(self.label)
                return True

        FilterChain([Recording("a"), Recording("b"), Recording("c")]).is_accepted(make_project())
        assert order == ["a", "b", "c"]

    def test_reports_rejecting_filter(self):
        messages = []
        rejecting = StubFilter(False)
        chain = FilterChain([StubFilter(True), rejecting], log=lambda level, msg: messages.append((level, msg)))

        decision = chain.evaluate(make_project("acme/widget"))

        assert decision.accepted is False
        assert "StubFilter" in decision.reason
        assert "stub(False)" in decision.reason
        assert messages and messages[0][0] == logging.DEBUG
        assert messages[0][1].startswith("acme/widget")

    def test_len_and_iteration(self):
        filters = [StubFilter(True), StubFilter(True)]
        chain = FilterChain(filters)
        assert len(chain) == 2
        assert list(chain) == filters
