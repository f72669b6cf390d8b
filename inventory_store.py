# inventory_store.py
from __future__ import annotations
import sqlite3
from datetime import date
from pathlib import Path
from typing import List, Optional

from expiry import parse_date
from paths import DB_PATH


class InventoryError(RuntimeError):
    pass


# -----------------------------
# SQLite (products + inventory_items)
# -----------------------------
def _connect(db_path: Path = DB_PATH) -> sqlite3.Connection:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        con = sqlite3.connect(db_path)
        con.row_factory = sqlite3.Row
        con.execute("PRAGMA foreign_keys = ON")
        con.execute(
            """
        CREATE TABLE IF NOT EXISTS products(
          id      INTEGER PRIMARY KEY AUTOINCREMENT,
          food_id TEXT NOT NULL UNIQUE,
          name    TEXT NOT NULL
        )"""
        )
        con.execute(
            """
        CREATE TABLE IF NOT EXISTS inventory_items(
          id              INTEGER PRIMARY KEY AUTOINCREMENT,
          user_id         TEXT,
          product_id      INTEGER NOT NULL REFERENCES products(id),
          quantity        INTEGER NOT NULL DEFAULT 1,
          expiration_date TEXT NOT NULL
        )"""
        )
    except sqlite3.Error as e:
        raise InventoryError(f"cannot open {db_path}: {e}") from e
    return con


def add_item(
    *,
    food_id: str,
    name: str,
    expiration_date: date,
    quantity: int = 1,
    user_id: Optional[str] = None,
    db_path: Path = DB_PATH,
) -> int:
    """Upsert the product by food_id, then insert the item; one transaction."""
    con = _connect(db_path)
    try:
        con.execute(
            """
            INSERT INTO products(food_id, name) VALUES(?, ?)
            ON CONFLICT(food_id) DO UPDATE SET name=excluded.name
        """,
            (food_id, name),
        )
        product_id = con.execute(
            "SELECT id FROM products WHERE food_id=?", (food_id,)
        ).fetchone()[0]
        cur = con.execute(
            """
            INSERT INTO inventory_items(user_id, product_id, quantity, expiration_date)
            VALUES(?, ?, ?, ?)
        """,
            (user_id, product_id, quantity, expiration_date.isoformat()),
        )
        con.commit()
        return int(cur.lastrowid)
    except sqlite3.Error as e:
        con.rollback()
        raise InventoryError(f"add_item failed: {e}") from e
    finally:
        con.close()


def list_items(
    user_id: Optional[str] = None, limit: int = 100, db_path: Path = DB_PATH
) -> List[dict]:
    sql = """
        SELECT ii.id, ii.user_id, p.name, ii.quantity, ii.expiration_date
        FROM inventory_items ii
        JOIN products p ON p.id = ii.product_id
    """
    params: list = []
    if user_id is not None:
        sql += " WHERE ii.user_id = ?"
        params.append(user_id)
    sql += " ORDER BY ii.expiration_date ASC, ii.id ASC LIMIT ?"
    params.append(limit)

    con = _connect(db_path)
    try:
        rows = con.execute(sql, params).fetchall()
    except sqlite3.Error as e:
        raise InventoryError(f"list_items failed: {e}") from e
    finally:
        con.close()
    return [
        {
            "id": r["id"],
            "user_id": r["user_id"],
            "name": r["name"],
            "quantity": r["quantity"],
            "expiration_date": parse_date(r["expiration_date"]),
        }
        for r in rows
    ]


def update_item(
    item_id: int,
    *,
    quantity: Optional[int] = None,
    expiration_date: Optional[date] = None,
    db_path: Path = DB_PATH,
) -> int:
    """Update quantity and/or expiration date; returns affected rows."""
    fields, values = [], []
    if quantity is not None:
        fields.append("quantity = ?")
        values.append(quantity)
    if expiration_date is not None:
        fields.append("expiration_date = ?")
        values.append(expiration_date.isoformat())
    if not fields:
        raise ValueError("nothing to update: quantity or expiration_date required")
    values.append(item_id)

    con = _connect(db_path)
    try:
        cur = con.execute(
            f"UPDATE inventory_items SET {', '.join(fields)} WHERE id = ?", values
        )
        con.commit()
        return cur.rowcount
    except sqlite3.Error as e:
        con.rollback()
        raise InventoryError(f"update_item failed: {e}") from e
    finally:
        con.close()


def delete_item(item_id: int, db_path: Path = DB_PATH) -> int:
    con = _connect(db_path)
    try:
        cur = con.execute("DELETE FROM inventory_items WHERE id = ?", (item_id,))
        con.commit()
        return cur.rowcount
    except sqlite3.Error as e:
        con.rollback()
        raise InventoryError(f"delete_item failed: {e}") from e
    finally:
        con.close()
