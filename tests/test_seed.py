"""
Tests for catalog/db/seed.py — loading the states reference table.
"""
from catalog.db import gateway
from catalog.db.seed import STATES_CSV, load_states, parse_states_csv


class TestParseStatesCsv:
    def test_bundled_file_has_all_federative_units(self):
        states_list, stats = parse_states_csv(STATES_CSV)
        assert stats["n_states"] == 27
        assert stats["n_errors"] == 0
        assert {"uf": "DF", "name": "Distrito Federal"} in states_list

    def test_bad_rows_are_reported(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("uf,name\nsp,São Paulo\nXYZ,Nowhere\nRJ,\n", encoding="utf-8")
        states_list, stats = parse_states_csv(path)
        assert states_list == [{"uf": "SP", "name": "São Paulo"}]
        assert stats["n_rows"] == 3
        assert stats["n_errors"] == 2
        assert [ex["row_number"] for ex in stats["error_examples"]] == [2, 3]

    def test_repeated_uf_keeps_last(self, tmp_path):
        path = tmp_path / "states.csv"
        path.write_text("uf,name\nSP,Sao Paulo\nSP,São Paulo\n", encoding="utf-8")
        states_list, _ = parse_states_csv(path)
        assert states_list == [{"uf": "SP", "name": "São Paulo"}]


class TestLoadStates:
    def test_upsert_is_idempotent(self, engine):
        before = gateway.list_states(engine)
        load_states(engine, [{"uf": "SP", "name": "São Paulo"}])
        assert gateway.list_states(engine) == before

    def test_upsert_renames_and_adds(self, engine):
        load_states(engine, [{"uf": "MG", "name": "Minas"}, {"uf": "BA", "name": "Bahia"}])
        assert gateway.get_state(engine, "MG")["name"] == "Minas"
        assert gateway.get_state(engine, "BA")["name"] == "Bahia"
