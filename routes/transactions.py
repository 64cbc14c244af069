from datetime import date

from flask import Blueprint, jsonify

from api_utils import CATEGORY_COLUMNS, ApiError, parse_body, parse_query, serialize_row, store_errors
from schemas import TransactionIn, TransactionQuery
from store import get_store

transactions_bp = Blueprint('transactions', __name__, url_prefix='/api/transactions')

SELECT_JOINED = f"""
    SELECT t.id, t.type, t.amount, t.category_id, t.date, t.description, t.created_at,
           {CATEGORY_COLUMNS}
    FROM transactions t
    LEFT JOIN categories c ON t.category_id = c.id
"""


def build_list_query(filters):
    """Return the list SQL and its parameters for the optional filters."""
    query = SELECT_JOINED + " WHERE 1=1"
    params = []

    if filters.type:
        query += " AND t.type = %s"
        params.append(filters.type)

    if filters.category_id:
        query += " AND t.category_id = %s"
        params.append(filters.category_id)

    query += " ORDER BY t.date DESC, t.created_at DESC, t.id DESC"

    if filters.limit:
        query += " LIMIT %s"
        params.append(filters.limit)

    return query, tuple(params)


def fetch_transaction(cur, id):
    cur.execute(SELECT_JOINED + " WHERE t.id = %s", (id,))
    return cur.fetchone()


@transactions_bp.route('', methods=['GET'])
@store_errors("Failed to fetch transactions")
def list_transactions():
    query, params = build_list_query(parse_query(TransactionQuery))

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
        return jsonify([serialize_row(row) for row in rows])
    finally:
        conn.close()


@transactions_bp.route('', methods=['POST'])
@store_errors("Failed to create transaction")
def create_transaction():
    tx = parse_body(TransactionIn)

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(
                "INSERT INTO transactions (type, amount, category_id, date, description) VALUES (%s, %s, %s, %s, %s)",
                (tx.type, tx.amount, tx.category_id, tx.date or date.today(), tx.description)
            )
            conn.commit()
            row = fetch_transaction(cur, cur.lastrowid)
        return jsonify(serialize_row(row)), 201
    finally:
        conn.close()


@transactions_bp.route('/<int:id>', methods=['PUT'])
@store_errors("Failed to update transaction")
def update_transaction(id):
    tx = parse_body(TransactionIn)

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute("SELECT id FROM transactions WHERE id = %s", (id,))
            if not cur.fetchone():
                raise ApiError("Transaction not found", 404)
            cur.execute(
                "UPDATE transactions SET type = %s, amount = %s, category_id = %s, date = %s, description = %s WHERE id = %s",
                (tx.type, tx.amount, tx.category_id, tx.date or date.today(), tx.description, id)
            )
            conn.commit()
            row = fetch_transaction(cur, id)
        return jsonify(serialize_row(row))
    finally:
        conn.close()


@transactions_bp.route('/<int:id>', methods=['DELETE'])
@store_errors("Failed to delete transaction")
def delete_transaction(id):
    conn = get_store().get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM transactions WHERE id = %s", (id,))
            if cur.rowcount == 0:
                raise ApiError("Transaction not found", 404)
            conn.commit()
        return jsonify({"message": "Transaction deleted successfully"})
    finally:
        conn.close()
