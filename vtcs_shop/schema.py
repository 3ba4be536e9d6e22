"""
Lab database provisioning.

The DDL sticks to types both MySQL and SQLite accept so the same
statements seed either backend.
"""

import logging
from typing import List

from vtcs_shop.backend import Database

logger = logging.getLogger(__name__)

CREATE_TABLES = [
    '''
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY,
        username VARCHAR(50) NOT NULL,
        password VARCHAR(50) NOT NULL,
        role VARCHAR(20) DEFAULT 'user'
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS products (
        id INTEGER PRIMARY KEY,
        name VARCHAR(100) NOT NULL,
        price DECIMAL(10, 2)
    )
    ''',
]

# VULNERABLE: plain text passwords
SAMPLE_USERS = [
    (1, 'admin', 'admin123', 'admin'),
    (2, 'john', 'password123', 'user'),
    (3, 'jane', 'jane2024', 'user'),
    (4, 'guest', 'guest', 'guest'),
]

SAMPLE_PRODUCTS = [
    (1, 'Laptop Pro 15', '1299.99'),
    (2, 'Wireless Mouse', '24.99'),
    (3, 'Mechanical Keyboard', '89.50'),
    (4, 'USB-C Hub', '39.00'),
    (5, '27 inch Monitor', '249.00'),
]


def seed_statements() -> List[str]:
    """INSERT statements for the sample rows"""
    statements = [
        f"INSERT INTO users (id, username, password, role) "
        f"VALUES ({uid}, '{username}', '{password}', '{role}')"
        for uid, username, password, role in SAMPLE_USERS
    ]
    statements += [
        f"INSERT INTO products (id, name, price) VALUES ({pid}, '{name}', {price})"
        for pid, name, price in SAMPLE_PRODUCTS
    ]
    return statements


def seed_database(db: Database) -> bool:
    """Create the tables and load sample rows into an empty database"""
    for statement in CREATE_TABLES:
        db.execute(statement)

    if db.first("SELECT COUNT(*) AS total FROM users")['total']:
        logger.info("Users table already populated, skipping sample data")
        db.commit()
        return False

    for statement in seed_statements():
        db.execute(statement)
    db.commit()

    logger.info(f"Seeded {len(SAMPLE_USERS)} users and {len(SAMPLE_PRODUCTS)} products")
    return True
