#!/usr/bin/env python3
"""API server for recipe selection and the merged shopping list."""

import logging
import os
import threading
import unicodedata
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from lib.categories import group_by_category
from lib.history import DEFAULT_MAX_HISTORY
from lib.preferences import load_preferences, save_preferences
from lib.recipe_book import RecipeBook
from lib.recipe_validator import RecipeValidationError, parse_recipe_data
from lib.share import generate_share_text, generate_share_title, generate_share_url
from lib.shopping_list_generator import ShoppingSession
from lib.storage import JsonStore
from lib.store_mode import category_order, get_layout_display_name
from templates.shopping_list_template import export_as_text, generate_filename, generate_shopping_list_markdown

load_dotenv()

DATA_DIR = Path(os.getenv('GROCERY_DATA_DIR', Path.home() / ".grocery-merger"))
HISTORY_LIMIT = int(os.getenv('GROCERY_HISTORY_LIMIT', DEFAULT_MAX_HISTORY))
SHARE_BASE_URL = os.getenv('GROCERY_SHARE_BASE_URL', 'http://localhost:5000/')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

logger = logging.getLogger(__name__)

app = Flask(__name__)

_state = {"store": None, "recipes": None, "session": None, "preferences": None}
_lock = threading.Lock()


def init_state(data_dir: Path = None) -> None:
    """Load recipes, the shopping session and preferences from disk."""
    store = JsonStore(data_dir or DATA_DIR)
    _state["store"] = store
    _state["recipes"] = RecipeBook(store)
    _state["session"] = ShoppingSession(store, max_history=HISTORY_LIMIT)
    _state["preferences"] = load_preferences(store)


def _ensure_state() -> None:
    with _lock:
        if _state["store"] is None:
            init_state()


def recipe_json(recipe) -> dict:
    data = recipe.to_dict()
    data["badges"] = _state["recipes"].badges_for(recipe)
    data["custom"] = _state["recipes"].is_custom(recipe.id)
    return data


def shopping_list_json() -> dict:
    session = _state["session"]
    prefs = _state["preferences"]
    grouped = group_by_category(session.items)
    order = category_order(prefs.store_mode, prefs.store_layout)

    return {
        "categories": [
            {"category": category, "items": [item.to_dict() for item in grouped[category]]}
            for category in order
        ],
        "item_count": len(session.items),
        "checked_count": sum(1 for item in session.items if item.checked),
        "can_undo": session.history.can_undo,
        "can_redo": session.history.can_redo,
    }


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and a UTF-8 filename* form."""
    simple = unicodedata.normalize('NFKD', filename).encode('ascii', 'ignore').decode('ascii')
    if simple == filename:
        return f'attachment; filename="{filename}"'
    quoted = quote(filename, safe="!#$&+^`|~")
    return f"attachment; filename=\"{simple}\"; filename*=UTF-8''{quoted}"


@app.before_request
def load_state():
    _ensure_state()


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({'status': 'ok'})


@app.route('/api/recipes', methods=['GET'])
def api_recipes():
    """Return all recipes with their dietary badges."""
    return jsonify([recipe_json(r) for r in _state["recipes"].all_recipes()])


@app.route('/api/recipes', methods=['POST'])
def api_recipes_save():
    """Create a custom recipe, or replace one when the payload has its id."""
    data = request.get_json(force=True, silent=True)

    try:
        recipe = parse_recipe_data(data)
        with _lock:
            saved = _state["recipes"].save_recipe(recipe)
    except RecipeValidationError as e:
        return jsonify({'success': False, 'error': str(e), 'errors': e.errors}), 400

    return jsonify({'success': True, 'recipe': recipe_json(saved)})


@app.route('/api/recipes/<recipe_id>', methods=['DELETE'])
def api_recipes_delete(recipe_id):
    with _lock:
        deleted = _state["recipes"].delete_recipe(recipe_id)
        if deleted:
            _state["session"].remove_recipe(recipe_id)

    if not deleted:
        return jsonify({'success': False, 'error': f'Custom recipe not found: {recipe_id}'}), 404
    return jsonify({'success': True})


@app.route('/api/recipes/import', methods=['POST'])
def api_recipes_import():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, list):
        return jsonify({'success': False, 'error': 'Request body must be a list of recipes'}), 400

    with _lock:
        count = _state["recipes"].import_recipes(data)
    return jsonify({'success': True, 'imported': count})


@app.route('/api/recipes/export', methods=['GET'])
def api_recipes_export():
    return jsonify(_state["recipes"].export_recipes())


@app.route('/api/selection', methods=['GET'])
def api_selection():
    return jsonify([s.to_dict() for s in _state["session"].selected])


@app.route('/api/selection', methods=['POST'])
def api_selection_toggle():
    """Select a recipe at its base servings, or deselect it."""
    data = request.get_json(force=True, silent=True) or {}
    recipe_id = data.get('recipe_id')

    if not recipe_id:
        return jsonify({'success': False, 'error': 'No recipe_id provided'}), 400

    recipes_by_id = _state["recipes"].by_id()
    if recipe_id not in recipes_by_id:
        return jsonify({'success': False, 'error': f'Recipe not found: {recipe_id}'}), 404

    with _lock:
        _state["session"].toggle_recipe(recipe_id, recipes_by_id)
    return jsonify([s.to_dict() for s in _state["session"].selected])


@app.route('/api/selection/<recipe_id>', methods=['PUT'])
def api_selection_servings(recipe_id):
    data = request.get_json(force=True, silent=True) or {}

    try:
        with _lock:
            _state["session"].set_servings(recipe_id, data.get('servings'))
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return jsonify([s.to_dict() for s in _state["session"].selected])


@app.route('/generate-shopping-list', methods=['POST'])
def generate_shopping_list_endpoint():
    """Merge the selected recipes into a fresh shopping list."""
    with _lock:
        result = _state["session"].generate(_state["recipes"].by_id())

    if not result['success']:
        return jsonify(result), 400

    return jsonify({
        'success': True,
        'item_count': len(result['items']),
        'recipes': result['recipes'],
        'warnings': result['warnings'],
        'list': shopping_list_json(),
    })


@app.route('/api/shopping-list', methods=['GET'])
def api_shopping_list():
    return jsonify(shopping_list_json())


@app.route('/api/shopping-list/items', methods=['POST'])
def api_add_item():
    """Add a custom item to the list."""
    data = request.get_json(force=True, silent=True) or {}

    try:
        with _lock:
            item = _state["session"].add_item(
                name=data.get('name'),
                quantity=data.get('quantity', 1),
                unit=data.get('unit', 'item'),
                category=data.get('category'),
                notes=data.get('notes'),
            )
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return jsonify({'success': True, 'item': item.to_dict()})


@app.route('/api/shopping-list/items/<item_id>', methods=['PATCH'])
def api_update_item(item_id):
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body must be an object'}), 400

    session = _state["session"]
    if not session.has_item(item_id):
        return jsonify({'success': False, 'error': f'Item not found: {item_id}'}), 404

    try:
        with _lock:
            session.update_item(item_id, data)
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return jsonify(shopping_list_json())


@app.route('/api/shopping-list/items/<item_id>', methods=['DELETE'])
def api_delete_item(item_id):
    session = _state["session"]
    if not session.has_item(item_id):
        return jsonify({'success': False, 'error': f'Item not found: {item_id}'}), 404

    with _lock:
        session.delete_item(item_id)
    return jsonify(shopping_list_json())


@app.route('/api/shopping-list/items/<item_id>/toggle', methods=['POST'])
def api_toggle_item(item_id):
    session = _state["session"]
    if not session.has_item(item_id):
        return jsonify({'success': False, 'error': f'Item not found: {item_id}'}), 404

    with _lock:
        session.toggle_item(item_id)
    return jsonify(shopping_list_json())


@app.route('/api/shopping-list/undo', methods=['POST'])
def api_undo():
    with _lock:
        _state["session"].undo()
    return jsonify(shopping_list_json())


@app.route('/api/shopping-list/redo', methods=['POST'])
def api_redo():
    with _lock:
        _state["session"].redo()
    return jsonify(shopping_list_json())


@app.route('/api/shopping-list/export', methods=['GET'])
def api_export_text():
    """Plain-text export grouped by category."""
    text = export_as_text(group_by_category(_state["session"].items))
    return Response(text, mimetype='text/plain')


@app.route('/api/shopping-list/markdown', methods=['GET'])
def api_export_markdown():
    prefs = _state["preferences"]
    title = request.args.get('title', 'Shopping List')
    markdown = generate_shopping_list_markdown(
        group_by_category(_state["session"].items),
        title=title,
        category_order=category_order(prefs.store_mode, prefs.store_layout),
    )
    return Response(
        markdown,
        mimetype='text/markdown',
        headers={'Content-Disposition': content_disposition(generate_filename(title))},
    )


@app.route('/api/shopping-list/share', methods=['GET'])
def api_share():
    """Share link plus a title and message describing the selected recipes."""
    session = _state["session"]
    recipes_by_id = _state["recipes"].by_id()
    recipes = [recipes_by_id[s.recipe_id] for s in session.selected if s.recipe_id in recipes_by_id]
    items = session.items

    return jsonify({
        'url': generate_share_url(items, SHARE_BASE_URL),
        'title': generate_share_title(recipes, len(items)),
        'text': generate_share_text(recipes, len(items)),
    })


@app.route('/api/shopping-list/import', methods=['POST'])
def api_import_shared():
    """Replace the list with a shared one. Bad data leaves the list untouched."""
    data = request.get_json(force=True, silent=True) or {}
    encoded = data.get('list')

    if not encoded:
        return jsonify({'success': False, 'error': 'No list provided'}), 400

    with _lock:
        imported = _state["session"].import_shared(encoded)

    if not imported:
        return jsonify({'success': False, 'error': 'Shared list could not be read'}), 400

    return jsonify({'success': True, 'list': shopping_list_json()})


@app.route('/api/preferences', methods=['GET'])
def api_preferences():
    prefs = _state["preferences"]
    data = prefs.to_dict()
    data["store_layout_name"] = get_layout_display_name(prefs.store_layout)
    return jsonify(data)


@app.route('/api/preferences', methods=['PUT'])
def api_preferences_update():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body must be an object'}), 400

    try:
        with _lock:
            prefs = _state["preferences"].updated(data)
            save_preferences(_state["store"], prefs)
            _state["preferences"] = prefs
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return jsonify(prefs.to_dict())


@app.route('/reset', methods=['POST'])
def reset():
    """Clear selections and the shopping list."""
    with _lock:
        _state["session"].reset()
    return jsonify({'success': True})


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    logger.error("Unhandled error on %s: %s", request.path, e, exc_info=True)
    return jsonify({'success': False, 'error': str(e)}), 500


if __name__ == '__main__':
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    init_state()
    port = int(os.getenv('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
