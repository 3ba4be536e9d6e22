"""
View Renderer

One Jinja template renders every page. Autoescaping is on, so anything
printed with plain {{ }} is HTML-encoded; the `raw` filter marks the spots
that deliberately are not.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from flask import render_template_string
from markupsafe import Markup

from vtcs_shop.backend import Database
from vtcs_shop.queries import USER_LIST_QUERY

ADMIN_ROLE = "admin"

SHOP_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>VTCS Shop - Vulnerable Demo App</title>
    <style>
        body { font-family: Arial, sans-serif; background: #f5f5f5; margin: 0; }
        .container { max-width: 1200px; margin: 0 auto; padding: 20px; }
        header { background: #2c3e50; color: white; padding: 20px; }
        nav a { color: white; margin-right: 15px; text-decoration: none; }
        .alert { padding: 15px; margin-bottom: 20px; border-radius: 4px; }
        .alert.success { background: #d4edda; color: #155724; }
        .alert.error { background: #f8d7da; color: #721c24; }
        .alert.info { background: #cce5ff; color: #004085; }
        .card { background: white; padding: 20px; margin-bottom: 20px; border-radius: 8px; }
        input, button { padding: 10px; margin: 5px 0; width: 100%; max-width: 300px; }
        button { background: #3498db; color: white; border: none; cursor: pointer; }
        table { width: 100%; border-collapse: collapse; }
        th, td { padding: 10px; text-align: left; border-bottom: 1px solid #ddd; }
        .warning-banner { background: #e74c3c; color: white; padding: 10px; text-align: center; }
    </style>
</head>
<body>
    <div class="warning-banner">
        &#9888; INTENTIONALLY VULNERABLE APPLICATION - FOR TRAINING ONLY &#9888;
    </div>

    <header>
        <h1>VTCS Shop</h1>
        <nav>
            <a href="?page=home">Home</a>
            <a href="?page=products">Products</a>
            <a href="?page=login">Login</a>
            {% if logged_in %}
            <a href="?page=admin">Admin</a>
            <a href="?logout=1">Logout ({{ user }})</a>
            {% endif %}
        </nav>
    </header>

    <div class="container">
        {{ message|raw }}

        {% if page == 'home' %}
        <div class="card">
            <h2>Welcome to VTCS Shop</h2>
            <p>This is a deliberately vulnerable web application for security training.</p>
            <h3>Search Products</h3>
            <form method="GET">
                <input type="hidden" name="page" value="home">
                <input type="text" name="search" placeholder="Search...">
                <button type="submit">Search</button>
            </form>
            {% if results %}
            <h3>Results:</h3>
            <table id="results">
                <tr><th>ID</th><th>Name</th><th>Price</th></tr>
                {% for product in results %}
                <tr>
                    <td>{{ product.id|raw }}</td>
                    <td>{{ product.name|raw }}</td>
                    <td>${{ product.price|raw }}</td>
                </tr>
                {% endfor %}
            </table>
            {% endif %}
        </div>

        {% elif page == 'login' %}
        <div class="card">
            <h2>Login</h2>
            <form method="POST">
                <input type="text" name="username" placeholder="Username" required><br>
                <input type="password" name="password" placeholder="Password" required><br>
                <button type="submit" name="login">Login</button>
            </form>
            <p><small>Hint: Try SQL injection on the login form</small></p>
        </div>

        {% elif page == 'admin' %}
        <div class="card">
            <h2>Admin Panel</h2>
            {% if logged_in %}
            <p>Welcome, {{ user|raw }}!</p>
            <p>Role: {{ role|raw }}</p>
            {% if is_admin %}
            <h3>User List</h3>
            <table id="users">
                <tr><th>ID</th><th>Username</th><th>Role</th></tr>
                {% for u in users %}
                <tr>
                    <td>{{ u.id|raw }}</td>
                    <td>{{ u.username }}</td>
                    <td>{{ u.role }}</td>
                </tr>
                {% endfor %}
            </table>
            {% else %}
            <p>Access denied. Admin role required.</p>
            {% endif %}
            {% else %}
            <p>Please <a href="?page=login">login</a> first.</p>
            {% endif %}
        </div>
        {% endif %}

        <div class="card">
            <h3>Known Vulnerabilities (Training)</h3>
            <ul>
                <li><strong>SQL Injection:</strong> Login form, search functionality</li>
                <li><strong>Cross-Site Scripting (XSS):</strong> Search results display</li>
                <li><strong>Information Disclosure:</strong> Verbose error messages</li>
                <li><strong>Weak Authentication:</strong> Plain text passwords in database</li>
            </ul>
        </div>
    </div>
</body>
</html>
"""


def raw(value: Any) -> Markup:
    """Emit a value without HTML encoding (VULNERABLE)"""
    return Markup("" if value is None else value)


@dataclass
class PageState:
    """Everything the renderer needs for one response"""
    page: str
    message: str = ""
    results: List[Dict[str, Any]] = field(default_factory=list)
    session: Mapping[str, Any] = field(default_factory=dict)


def render_page(state: PageState, db: Database) -> str:
    user = state.session.get('user')
    role = state.session.get('role')
    logged_in = user is not None

    # VULNERABLE: the stored role string is trusted as-is
    is_admin = state.page == 'admin' and logged_in and role == ADMIN_ROLE
    users = db.query(USER_LIST_QUERY.bind()) if is_admin else []

    return render_template_string(
        SHOP_TEMPLATE,
        page=state.page,
        message=state.message,
        results=state.results,
        logged_in=logged_in,
        user=user if logged_in else "",
        role=role if role is not None else "user",
        is_admin=is_admin,
        users=users,
    )
