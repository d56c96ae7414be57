"""Root landing page: store name, API base and links to the docs."""

from html import escape


def render_root_page(app_name: str, version: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            background: #fafafa;
            color: #222;
            padding: 3rem 1rem;
        }}
        main {{
            max-width: 520px;
            margin: 0 auto;
        }}
        h1 {{
            font-size: 2rem;
            margin: 0 0 0.25rem 0;
        }}
        .version {{
            color: #888;
            font-size: 0.875rem;
        }}
        code {{
            font-family: ui-monospace, monospace;
            background: #eee;
            padding: 0.1rem 0.35rem;
        }}
        a.btn {{
            display: inline-block;
            margin: 1.5rem 0.5rem 0 0;
            padding: 0.6rem 1.1rem;
            border: 1px solid #222;
            color: #222;
            text-decoration: none;
        }}
        a.btn.primary {{
            background: #222;
            color: #fff;
        }}
    </style>
</head>
<body>
    <main>
        <h1>{name}</h1>
        <div class="version">v{escape(version)}</div>
        <p>Storefront admin API. Catalog reads under <code>/api/products</code> and
        <code>/api/categories</code> are public; everything else needs an admin
        session (sign in through <code>/api/auth/login</code>).</p>
        <a href="/docs" class="btn primary">API docs (Swagger)</a>
        <a href="/redoc" class="btn">ReDoc</a>
    </main>
</body>
</html>
""".strip()
