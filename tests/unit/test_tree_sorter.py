"""Tests for canonical name ordering of project trees."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.catalog.domain.tree import DatabaseNode, ProjectTree, SqlServerNode, TableNode
from src.catalog.services.tree_sorter import canonicalize, is_canonical, sort_by_name

pytestmark = pytest.mark.unit


names = st.text(min_size=1, max_size=8)
tables = st.lists(st.builds(TableNode, name=names), max_size=4)
databases = st.lists(st.builds(DatabaseNode, name=names, tables=tables), max_size=4)
servers = st.lists(st.builds(SqlServerNode, name=names, databases=databases), max_size=4)


def _project(**kwargs) -> ProjectTree:
    return ProjectTree.model_validate({"name": "P", **kwargs})


class TestSortByName:
    def test_sorts_ascending(self):
        nodes = [TableNode(name="b"), TableNode(name="a"), TableNode(name="c")]

        result = sort_by_name(nodes)

        assert [n.name for n in result] == ["a", "b", "c"]

    def test_uses_codepoint_order(self):
        """Uppercase sorts before lowercase; no locale collation."""
        nodes = [TableNode(name="beta"), TableNode(name="Alpha"), TableNode(name="alpha")]

        result = sort_by_name(nodes)

        assert [n.name for n in result] == ["Alpha", "alpha", "beta"]

    def test_none_and_empty_are_noops(self):
        assert sort_by_name(None) is None
        assert sort_by_name([]) == []

    def test_does_not_mutate_input(self):
        nodes = [TableNode(name="b"), TableNode(name="a")]

        sort_by_name(nodes)

        assert [n.name for n in nodes] == ["b", "a"]

    def test_stable_for_equal_names(self):
        first = TableNode.model_validate({"name": "t", "seq": 1})
        second = TableNode.model_validate({"name": "t", "seq": 2})

        result = sort_by_name([second, first])

        assert [n.model_extra["seq"] for n in result] == [2, 1]

    def test_recurses_into_databases_and_tables(self):
        server = SqlServerNode.model_validate(
            {
                "name": "S",
                "databases": [
                    {"name": "D2", "tables": [{"name": "T2"}, {"name": "T1"}]},
                    {"name": "D1"},
                ],
            }
        )

        (result,) = sort_by_name([server])

        assert [d.name for d in result.databases] == ["D1", "D2"]
        assert [t.name for t in result.databases[1].tables] == ["T1", "T2"]

    def test_non_recursive_leaves_children_alone(self):
        server = SqlServerNode.model_validate(
            {"name": "S", "databases": [{"name": "D2"}, {"name": "D1"}]}
        )

        (result,) = sort_by_name([server], recursive=False)

        assert [d.name for d in result.databases] == ["D2", "D1"]

    def test_keeps_extra_attributes(self):
        server = SqlServerNode.model_validate(
            {"name": "S", "host": "db.local", "databases": [{"name": "D", "owner": "ops"}]}
        )

        (result,) = sort_by_name([server])

        assert result.model_extra == {"host": "db.local"}
        assert result.databases[0].model_extra == {"owner": "ops"}


class TestCanonicalize:
    def test_sorts_every_level(self):
        project = _project(
            sqlServers=[
                {"name": "S2"},
                {
                    "name": "S1",
                    "databases": [{"name": "DB", "tables": [{"name": "z"}, {"name": "a"}]}],
                },
            ]
        )

        result = canonicalize(project)

        assert [s.name for s in result.sql_servers] == ["S1", "S2"]
        assert [t.name for t in result.sql_servers[0].databases[0].tables] == ["a", "z"]
        assert is_canonical(result.sql_servers)

    def test_project_without_servers(self):
        project = _project(description="no servers")

        result = canonicalize(project)

        assert result.sql_servers is None
        assert result.description == "no servers"

    def test_absent_children_stay_absent(self):
        project = _project(sqlServers=[{"name": "S1"}])

        result = canonicalize(project)

        assert "databases" not in result.sql_servers[0].model_fields_set

    @given(servers=servers)
    @settings(max_examples=50)
    def test_result_is_canonical(self, servers):
        result = canonicalize(ProjectTree(name="P", sql_servers=servers))

        assert is_canonical(result.sql_servers)

    @given(servers=servers)
    @settings(max_examples=50)
    def test_idempotent(self, servers):
        once = canonicalize(ProjectTree(name="P", sql_servers=servers))
        twice = canonicalize(once)

        assert twice.model_dump() == once.model_dump()

    @given(servers=servers)
    @settings(max_examples=50)
    def test_no_nodes_lost(self, servers):
        result = canonicalize(ProjectTree(name="P", sql_servers=servers))

        assert sorted(s.name for s in result.sql_servers) == sorted(s.name for s in servers)
        assert sum(len(s.databases or []) for s in result.sql_servers) == sum(
            len(s.databases or []) for s in servers
        )
