"""Tests for the shopping list CLI."""

import json
from unittest.mock import patch

import pytest

import shopping_list
from lib.models import SelectedRecipe
from lib.recipe_book import load_default_recipes
from lib.share import parse_share_url
from shopping_list import build_selections, main, parse_recipe_arg


def run_cli(tmp_path, *args):
    with patch.object(shopping_list, 'DATA_DIR', tmp_path), \
         patch('sys.argv', ['shopping_list.py', *args]):
        main()


class TestParseRecipeArg:
    def test_id_only(self):
        assert parse_recipe_arg("greek-salad") == ("greek-salad", None)

    def test_with_servings(self):
        assert parse_recipe_arg("greek-salad:6") == ("greek-salad", 6)

    @pytest.mark.parametrize("value", ["greek-salad:zero", "greek-salad:0", ":4", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_recipe_arg(value)


def test_build_selections_defaults_to_base_servings():
    """Recipes without servings use their base servings."""
    recipes_by_id = {r.id: r for r in load_default_recipes()}
    selected = build_selections(["greek-salad", "salmon-tacos:2"], recipes_by_id)
    assert selected == [SelectedRecipe("greek-salad", 2), SelectedRecipe("salmon-tacos", 2)]


class TestMain:
    def test_prints_text_list(self, tmp_path, capsys):
        run_cli(tmp_path, "--recipe", "greek-salad", "--recipe", "spaghetti-bolognese")
        out = capsys.readouterr().out
        assert out.startswith("== Produce ==")
        assert "[ ] 5 tbsp olive oil" in out
        assert "[ ] 1½ tsp dried oregano" in out

    def test_scales_servings(self, tmp_path, capsys):
        run_cli(tmp_path, "--recipe", "greek-salad:4")
        assert "[ ] 200 g feta" in capsys.readouterr().out

    def test_markdown_with_store_mode(self, tmp_path, capsys):
        run_cli(tmp_path, "--recipe", "spaghetti-bolognese", "--markdown", "--store-mode")
        out = capsys.readouterr().out
        assert out.startswith("# Shopping List")
        assert out.index("## Dairy") < out.index("## Meat")

    def test_share(self, tmp_path, capsys):
        run_cli(tmp_path, "--recipe", "greek-salad", "--share")
        url = capsys.readouterr().out.strip()
        assert len(parse_share_url(url)) == 7

    def test_output_file(self, tmp_path):
        output = tmp_path / "list.txt"
        run_cli(tmp_path, "--recipe", "greek-salad", "--output", str(output))
        assert "feta" in output.read_text(encoding="utf-8")

    def test_list_recipes(self, tmp_path, capsys):
        run_cli(tmp_path, "--list-recipes")
        out = capsys.readouterr().out
        assert "greek-salad" in out
        assert "Greek Salad (serves 2)" in out

    def test_recipes_file(self, tmp_path, capsys):
        recipes_file = tmp_path / "mine.json"
        recipes_file.write_text(json.dumps([{
            "id": "my-chili", "name": "My Chili", "servings_base": 4,
            "ingredients": [{"name": "kidney beans", "quantity": 2, "unit": "cup"}],
        }]))
        run_cli(tmp_path, "--recipes-file", str(recipes_file), "--recipe", "my-chili:8")
        assert "[ ] 4 cup kidney beans" in capsys.readouterr().out

    def test_invalid_recipes_file(self, tmp_path, capsys):
        recipes_file = tmp_path / "bad.json"
        recipes_file.write_text("{not json")
        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path, "--recipes-file", str(recipes_file), "--recipe", "x")
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err

    def test_no_recipes(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path)
        assert exc_info.value.code == 1
        assert "No recipes selected" in capsys.readouterr().err

    def test_unknown_recipe(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            run_cli(tmp_path, "--recipe", "nope")
        err = capsys.readouterr().err
        assert "Recipe not found: nope" in err

    def test_bad_servings(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            run_cli(tmp_path, "--recipe", "greek-salad:lots")
        assert "Invalid servings" in capsys.readouterr().err
