import logging

from flask import Flask, jsonify, request
from flask_migrate import Migrate
from sqlalchemy.orm import joinedload
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import ITEM_FLAGS
from models import db, Item, RecipeComponent
from services import build_catalog, calculate_item, components_from_payload
from services.logging_utils import log_operation
from utils import PayloadError, parse_item_payload, parse_components_payload, sanitize_item_name

app = Flask(__name__)
app.config.from_object(get_config())

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('kitchen_costing.app')

db.init_app(app)
migrate = Migrate(app, db)


# ============================================
# SERIALIZATION
# ============================================

def component_to_json(row):
    return {
        'itemId': row.component_item_id,
        'quantity': row.quantity,
        'unit': row.unit,
        'deletedItemName': row.deleted_item_name,
        'subRecipeId': row.sub_recipe_id,
        'subRecipeName': row.sub_recipe_name,
    }


def item_to_json(item, details=False):
    """Item as returned by the API. details adds the fields of the detail view."""
    data = {
        'id': item.id,
        'name': item.name,
        'type': item.item_type,
        'unit': item.unit,
        'purchasePrice': item.purchase_price,
        'components': [component_to_json(row) for row in item.components],
    }
    if details:
        data.update({
            'brand': item.brand,
            'category': item.category,
            'currency': app.config['CURRENCY'],
            'targetPortions': item.target_portions,
            'targetSalesPrice': item.target_sales_price,
            'portionUnit': item.portion_unit,
            'allergens': item.allergens or [],
            'nutritionPerUnit': item.nutrition_per_unit,
            'preparationSteps': item.preparation_steps,
            'hasGhostComponents': any(
                row.component_item_id is None and row.deleted_item_name
                for row in item.components
            ),
        })
        data.update({key: bool(getattr(item, column)) for column, key in ITEM_FLAGS.items()})
    return data


# ============================================
# HELPERS
# ============================================

def get_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError('Request body must be a JSON object')
    return data


def check_component_items(rows):
    """All referenced component and sub-recipe items must exist."""
    ids = {row[key] for row in rows for key in ('component_item_id', 'sub_recipe_id') if row[key]}
    if not ids:
        return
    found = {item_id for (item_id,) in db.session.query(Item.id).filter(Item.id.in_(ids))}
    unknown = sorted(ids - found)
    if unknown:
        raise PayloadError(f"Unknown component item(s): {', '.join(unknown)}")


def replace_components(item, rows):
    """Replace an item's component list, keeping the given order."""
    item.components = [
        RecipeComponent(position=position, **row)
        for position, row in enumerate(rows)
    ]


def load_catalog():
    """Snapshot of all items and their components for the aggregation engine."""
    items = Item.query.options(joinedload(Item.components)).all()
    return build_catalog(items)


# ============================================
# ERROR HANDLERS
# ============================================

@app.errorhandler(PayloadError)
def handle_payload_error(error):
    return jsonify({'error': str(error)}), 400


@app.errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({'error': error.description}), error.code


@app.errorhandler(Exception)
def handle_unexpected_error(error):
    db.session.rollback()
    logger.exception('Unhandled error on %s %s', request.method, request.path)
    return jsonify({'error': 'Internal server error'}), 500


# ============================================
# ROUTES - INVENTORY
# ============================================

@app.route('/api/inventory', methods=['GET'])
def inventory_list():
    items = Item.query.options(joinedload(Item.components)).order_by(Item.name).all()
    return jsonify([item_to_json(item) for item in items])


@app.route('/api/inventory', methods=['POST'])
def inventory_create():
    data = get_json_body()
    values = parse_item_payload(data)
    rows = parse_components_payload(data.get('components'))
    check_component_items(rows)

    item = Item(**values)
    replace_components(item, rows)
    db.session.add(item)
    db.session.commit()

    log_operation(logger, 'create_item', 'success', item_id=item.id, component_count=len(rows))
    return jsonify(item_to_json(item, details=True)), 201


# ============================================
# ROUTES - ITEM DETAILS
# ============================================

@app.route('/api/items/<item_id>', methods=['GET'])
def item_detail(item_id):
    item = db.get_or_404(Item, item_id, description='Item not found')
    return jsonify({'item': item_to_json(item, details=True)})


@app.route('/api/items/<item_id>', methods=['PATCH'])
def item_update(item_id):
    item = db.get_or_404(Item, item_id, description='Item not found')
    data = get_json_body()
    values = parse_item_payload(data, partial=True)

    rows = None
    if 'components' in data:
        rows = parse_components_payload(data['components'])
        check_component_items(rows)

    for column, value in values.items():
        setattr(item, column, value)
    if rows is not None:
        replace_components(item, rows)
    db.session.commit()

    log_operation(logger, 'update_item', 'success', item_id=item.id, fields=sorted(values))
    return jsonify({'item': item_to_json(item, details=True)})


@app.route('/api/items/<item_id>', methods=['DELETE'])
def item_delete(item_id):
    item = db.get_or_404(Item, item_id, description='Item not found')
    name = item.name

    # Recipes keep a ghost line so the missing ingredient stays visible
    ghosted = RecipeComponent.query.filter(
        RecipeComponent.component_item_id == item.id,
        RecipeComponent.parent_item_id != item.id,
    ).update(
        {'component_item_id': None, 'deleted_item_name': name},
        synchronize_session='fetch',
    )
    RecipeComponent.query.filter(RecipeComponent.sub_recipe_id == item.id).update(
        {'sub_recipe_id': None},
        synchronize_session='fetch',
    )

    db.session.delete(item)
    db.session.commit()

    log_operation(logger, 'delete_item', 'success', item_id=item_id, ghosted_count=ghosted)
    return jsonify({'deleted': item_id, 'ghostedCount': ghosted})


# ============================================
# ROUTES - RECIPE STRUCTURE
# ============================================

@app.route('/api/recipe-structure', methods=['POST'])
def recipe_structure_save():
    data = get_json_body()
    parent_id = data.get('parentItemId')
    if not parent_id:
        raise PayloadError('parentItemId is required')

    parent = db.get_or_404(Item, str(parent_id), description='Item not found')
    rows = parse_components_payload(data.get('components'))
    check_component_items(rows)

    replace_components(parent, rows)
    db.session.commit()

    log_operation(logger, 'replace_components', 'success',
                  parent_item_id=parent.id, component_count=len(rows))
    return jsonify([component_to_json(row) for row in parent.components])


@app.route('/api/recipe-structure', methods=['PATCH'])
def recipe_structure_replace_ghosts():
    data = get_json_body()
    deleted_name = sanitize_item_name(data.get('deletedItemName'))
    new_item_id = data.get('newItemId')
    if not deleted_name or not new_item_id:
        raise PayloadError('deletedItemName and newItemId are required to replace components')

    new_item = db.get_or_404(Item, str(new_item_id), description='Item not found')

    replaced = RecipeComponent.query.filter(
        RecipeComponent.deleted_item_name == deleted_name,
        RecipeComponent.component_item_id.is_(None),
    ).update(
        {'component_item_id': new_item.id, 'deleted_item_name': None},
        synchronize_session='fetch',
    )
    db.session.commit()

    log_operation(logger, 'replace_ghost_components', 'success',
                  deleted_item_name=deleted_name, new_item_id=new_item.id, replaced_count=replaced)
    return jsonify({'replacedCount': replaced})


# ============================================
# ROUTES - CALCULATION
# ============================================

@app.route('/api/items/<item_id>/calculation', methods=['GET', 'POST'])
def item_calculation(item_id):
    """
    Cost, nutrition, allergens and economics of an item.

    POST accepts {"components": [...]} to preview unsaved edits; the stored
    component list is used otherwise.
    """
    catalog = load_catalog()
    root = catalog.get(item_id)
    if root is None:
        return jsonify({'error': 'Item not found'}), 404

    components = None
    if request.method == 'POST':
        data = get_json_body()
        if 'components' in data:
            if not isinstance(data['components'], list):
                raise PayloadError('components must be a list')
            components = components_from_payload(data['components'])

    result = calculate_item(root, catalog, components, app.config['RECIPE_CYCLE_GUARD'])
    result['currency'] = app.config['CURRENCY']
    return jsonify(result)


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db():
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
