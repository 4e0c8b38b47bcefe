"""Root landing page for the RenoTimeline workflow scheduler."""

from html import escape


def render_root_page(app_name: str) -> str:
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
            background: #000;
            color: #e0e0e0;
            padding: 2rem 1rem;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ font-weight: 600; color: #fff; }}
        .card {{
            background: #0c0c0c;
            border: 1px solid #1a1a1a;
            padding: 1.5rem 1.75rem;
            margin-bottom: 1.25rem;
        }}
        .card p {{ color: #999; line-height: 1.55; }}
        code {{ font-family: monospace; color: #b0b0b0; }}
        a.btn {{
            display: inline-block;
            padding: 0.65rem 1.25rem;
            background: #222;
            color: #e0e0e0;
            text-decoration: none;
            border: 1px solid #333;
            margin-right: 0.5rem;
        }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>RenoTimeline scheduler</h1>
        <section class="card">
            <p>Runs due-date, scheduled and overdue workflow triggers for RenoTimeline projects.
            Point your cron at <code>POST /api/v1/scheduler/run</code> (send
            <code>X-Scheduler-Secret</code> when a secret is configured).</p>
            <p>Run locally with <code>uvicorn app.main:app --reload</code> after
            <code>alembic upgrade head</code>.</p>
            <a href="/docs" class="btn">API docs</a>
            <a href="/api/v1/health" class="btn">Health</a>
        </section>
        <p><code>{name}</code></p>
    </div>
</body>
</html>
""".strip()
