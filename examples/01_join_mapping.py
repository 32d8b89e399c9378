"""
Example 01: Join Mapping

This example demonstrates reconstructing nested objects from a single joined
query: users with their orders, each order with its line items.
"""

import logging
import sqlite3

from join_map import MapRegistry, map_collection, map_single


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript("""
        CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id),
            status TEXT NOT NULL
        );
        CREATE TABLE line_items (
            order_id INTEGER NOT NULL REFERENCES orders(id),
            line_no INTEGER NOT NULL,
            product TEXT NOT NULL,
            PRIMARY KEY (order_id, line_no)
        );
        INSERT INTO users (name) VALUES ('Alice'), ('Bob');
        INSERT INTO orders (user_id, status) VALUES (1, 'completed'), (1, 'pending');
        INSERT INTO line_items VALUES (1, 1, 'Keyboard'), (1, 2, 'Mouse'), (2, 1, 'Monitor');
    """)

    rows = [
        dict(row)
        for row in conn.execute("""
            SELECT
                u.id AS id,
                u.name AS name,
                o.id AS order_id,
                o.status AS order_status,
                li.order_id AS item_order_id,
                li.line_no AS item_line_no,
                li.product AS item_product
            FROM users u
            LEFT JOIN orders o ON o.user_id = u.id
            LEFT JOIN line_items li ON li.order_id = o.id
            ORDER BY u.id, o.id, li.line_no
        """)
    ]
    conn.close()

    registry = MapRegistry([
        {
            "mapId": "user",
            "properties": ["name"],
            "collections": [{"name": "orders", "mapId": "order", "columnPrefix": "order_"}],
        },
        {
            "mapId": "order",
            "properties": ["status"],
            "collections": [{"name": "items", "mapId": "item", "columnPrefix": "item_"}],
        },
        {
            "mapId": "item",
            "idProperty": [{"name": "orderId", "column": "order_id"}, {"name": "line", "column": "line_no"}],
            "properties": ["product"],
        },
    ])

    print("=== Join Mapping ===\n")
    print(f"{len(rows)} rows from the join\n")

    for user in map_collection(rows, registry, "user"):
        print(f"User: {user['name']}")
        print(f"  Orders ({len(user['orders'])}):")
        for order in user["orders"]:
            products = ", ".join(item["product"] for item in order["items"])
            print(f"    - Order #{order['id']} ({order['status']}): {products}")
        print()

    bob = map_single([r for r in rows if r["id"] == 2], registry, "user")
    print(f"Single user: {bob['name']} with {len(bob['orders'])} orders")


if __name__ == "__main__":
    main()
