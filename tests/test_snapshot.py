"""Tests for GraphSnapshot and snapshot loading."""

import json

import pytest

from conftest import make_node, make_option

from dialoguegraph.exceptions import NodeNotFoundError, SnapshotError
from dialoguegraph.snapshot import GraphSnapshot, load_snapshot, snapshot_from_data


class TestGraphSnapshot:
    def test_lookups(self, tavern_nodes):
        snapshot = GraphSnapshot(nodes=tavern_nodes)

        assert snapshot.node("n-quest").name == "Quest"
        assert snapshot.node("nope") is None
        assert snapshot.owner_of("o-quest-ask").id == "n-quest"
        assert snapshot.owner_of("nope") is None

    def test_find_by_id_or_name(self, tavern_nodes):
        snapshot = GraphSnapshot(nodes=tavern_nodes)

        assert snapshot.find("n-rumours").name == "Rumours"
        assert snapshot.find("Rumours").id == "n-rumours"
        with pytest.raises(NodeNotFoundError):
            snapshot.find("Nobody")

    def test_queries_delegate(self, tavern_nodes):
        snapshot = GraphSnapshot(nodes=tavern_nodes)
        farewell = snapshot.node("n-farewell")

        assert snapshot.links_to(farewell) == ["o-greet-bye", "o-rumours-bye", "o-quest-accept"]
        assert [n.name for n in snapshot.referrers(farewell)] == ["Greeting", "Rumours", "Quest"]
        assert [n.name for n in snapshot.filter("dragon")] == ["Rumours", "Quest"]
        assert snapshot.resolve(snapshot.node("n-quest").options[1]).status == "missing"
        assert [o.id for _, o in snapshot.dangling()] == ["o-quest-ask"]
        assert snapshot.stale() == []
        assert snapshot.duplicate_option_ids() == []

    def test_stats(self, tavern_nodes):
        stats = GraphSnapshot(nodes=tavern_nodes).stats()
        assert stats == {"nodes": 4, "lines": 4, "options": 7, "endings": 1}

    def test_none_nodes_is_empty(self):
        snapshot = GraphSnapshot(nodes=None)
        assert snapshot.nodes == []
        assert snapshot.stats() == {"nodes": 0, "lines": 0, "options": 0, "endings": 0}
        with pytest.raises(NodeNotFoundError):
            snapshot.find("anything")

    def test_empty(self):
        snapshot = GraphSnapshot()
        assert snapshot.stats()["nodes"] == 0
        assert snapshot.filter("x") == []
        assert snapshot.check_index_consistency() == []


class TestIndexConsistency:
    def test_fresh_snapshot_is_consistent(self, tavern_nodes):
        assert GraphSnapshot(nodes=tavern_nodes).check_index_consistency() == []

    def test_detects_drift_after_external_append(self, tavern_nodes):
        snapshot = GraphSnapshot(nodes=list(tavern_nodes))
        snapshot.nodes.append(make_node("late", "Late", options=[make_option("o-late")]))

        errors = snapshot.check_index_consistency()

        assert any("_by_id missing" in e for e in errors)
        assert any("o-late" in e for e in errors)

        snapshot._rebuild_indices()
        assert snapshot.check_index_consistency() == []

    def test_reports_duplicate_option_ids(self):
        nodes = [
            make_node("a", "A", options=[make_option("dup")]),
            make_node("b", "B", options=[make_option("dup")]),
        ]

        errors = GraphSnapshot(nodes=nodes).check_index_consistency()

        assert any("expected 2" in e for e in errors)
        assert any("expected 'A'" in e for e in errors)


class TestLoading:
    def test_load_camel_case_file(self, nodes_file):
        snapshot = load_snapshot(nodes_file)
        assert [n.name for n in snapshot.nodes] == ["Greeting", "Rumours", "Quest", "Farewell"]
        assert snapshot.node("n-greeting").options[0].next_node_id == "n-rumours"

    def test_accepts_wrapped_nodes(self):
        snapshot = snapshot_from_data({"nodes": [{"id": "a", "name": "A", "options": None}]})
        assert snapshot.node("a").options == []

    def test_null_data_is_empty(self):
        assert snapshot_from_data(None).nodes == []

    def test_rejects_non_list(self):
        with pytest.raises(SnapshotError, match="expected a list"):
            snapshot_from_data("nodes")

    def test_rejects_invalid_node(self):
        with pytest.raises(SnapshotError):
            snapshot_from_data([{"id": "a"}])  # name missing

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError):
            load_snapshot(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError, match="invalid JSON"):
            load_snapshot(path)

    def test_preserves_order(self, tmp_path):
        path = tmp_path / "nodes.json"
        path.write_text(json.dumps([{"id": str(i), "name": f"n{i}"} for i in range(5, 0, -1)]))
        assert [n.id for n in load_snapshot(path).nodes] == ["5", "4", "3", "2", "1"]
