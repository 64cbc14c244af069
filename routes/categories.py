from flask import Blueprint, jsonify

from api_utils import ApiError, parse_body, serialize_row, store_errors
from schemas import CategoryIn
from store import get_store

categories_bp = Blueprint('categories', __name__, url_prefix='/api/categories')

CATEGORY_FIELDS = "id, name, icon, is_default, created_at"


@categories_bp.route('', methods=['GET'])
@store_errors("Failed to fetch categories")
def list_categories():
    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(f"SELECT {CATEGORY_FIELDS} FROM categories ORDER BY name ASC")
            rows = cur.fetchall()
        return jsonify([serialize_row(row) for row in rows])
    finally:
        conn.close()


@categories_bp.route('', methods=['POST'])
@store_errors("Failed to create category")
def create_category():
    category = parse_body(CategoryIn)

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(
                "INSERT INTO categories (name, icon, is_default) VALUES (%s, %s, %s)",
                category.as_row()
            )
            conn.commit()
            cur.execute(f"SELECT {CATEGORY_FIELDS} FROM categories WHERE id = %s", (cur.lastrowid,))
            row = cur.fetchone()
        return jsonify(serialize_row(row)), 201
    finally:
        conn.close()


@categories_bp.route('/<int:id>', methods=['DELETE'])
@store_errors("Failed to delete category")
def delete_category(id):
    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute("SELECT id FROM categories WHERE id = %s", (id,))
            if not cur.fetchone():
                raise ApiError("Category not found", 404)

            # restrict while transactions or budgets still point at it
            cur.execute("""
                SELECT
                    (SELECT COUNT(*) FROM transactions WHERE category_id = %s) +
                    (SELECT COUNT(*) FROM budgets WHERE category_id = %s) AS refs
            """, (id, id))
            if cur.fetchone()['refs']:
                raise ApiError("Category is in use", 409)

            cur.execute("DELETE FROM categories WHERE id = %s", (id,))
            conn.commit()
        return jsonify({"message": "Category deleted successfully"})
    finally:
        conn.close()
