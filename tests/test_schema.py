from vtcs_shop.schema import SAMPLE_PRODUCTS, SAMPLE_USERS, seed_database


def test_seed_loads_sample_rows(db):
    users = db.query("SELECT * FROM users")
    products = db.query("SELECT * FROM products")
    assert len(users) == len(SAMPLE_USERS)
    assert len(products) == len(SAMPLE_PRODUCTS)
    assert users[0] == {'id': 1, 'username': 'admin', 'password': 'admin123', 'role': 'admin'}


def test_seed_is_skipped_when_users_exist(db):
    assert seed_database(db) is False
    assert len(db.query("SELECT * FROM users")) == len(SAMPLE_USERS)
