"""Root landing page: a small search box with live suggestions and API links."""

from html import escape


def render_root_page(app_name: str, api_prefix: str = "/api/v1") -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    prefix = escape(api_prefix)
    return f"""
<!DOCTYPE html>
<html lang="vi">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        :root {{ --ink: #2b2118; --muted: #7a6a58; --paper: #fbf7f0; --line: #e4d9c6; --accent: #9a3412; }}
        body {{
            margin: 0;
            font: 16px/1.6 Georgia, 'Noto Serif', serif;
            color: var(--ink);
            background: var(--paper);
        }}
        main {{ max-width: 720px; margin: 0 auto; padding: 3rem 1.25rem; }}
        h1 {{ font-weight: normal; font-size: 2rem; margin: 0 0 0.25rem; }}
        .lead {{ color: var(--muted); margin: 0 0 2rem; }}
        .panel {{ border-top: 2px solid var(--ink); padding: 1.25rem 0 1.5rem; }}
        .panel h2 {{ font-size: 0.8rem; letter-spacing: 0.12em; text-transform: uppercase; color: var(--muted); margin: 0 0 0.75rem; }}
        #term {{ width: 100%; box-sizing: border-box; padding: 0.6rem 0.75rem; font: inherit; border: 1px solid var(--line); background: #fff; }}
        #term:focus {{ outline: 2px solid var(--accent); }}
        #suggestions {{ list-style: none; margin: 0; padding: 0; background: #fff; border: 1px solid var(--line); border-top: 0; }}
        #suggestions:empty {{ display: none; }}
        #suggestions li {{ padding: 0.4rem 0.75rem; cursor: pointer; }}
        #suggestions li:hover {{ background: var(--paper); color: var(--accent); }}
        .result {{ padding: 0.75rem 0; border-bottom: 1px dotted var(--line); }}
        .meta {{ font-size: 0.85rem; color: var(--muted); }}
        code, .code {{ font: 0.85rem ui-monospace, Menlo, Consolas, monospace; }}
        nav a {{ color: var(--accent); margin-right: 1rem; }}
        footer {{ margin-top: 3rem; font-size: 0.85rem; color: var(--muted); }}
    </style>
</head>
<body>
    <main>
        <header>
            <h1>{name}</h1>
            <p class="lead">Tìm kiếm kinh văn · passage search and autocomplete</p>
        </header>

        <section class="panel" aria-labelledby="search-heading">
            <h2 id="search-heading">Search</h2>
            <form id="search-form">
                <input type="search" id="term" autocomplete="off" placeholder="Nhập từ khóa…">
            </form>
            <ul id="suggestions"></ul>
            <p id="summary" class="code"></p>
            <div id="results"></div>
        </section>

        <section class="panel" aria-labelledby="api-heading">
            <h2 id="api-heading">API</h2>
            <p><code>POST {prefix}/search</code> · <code>GET {prefix}/autocomplete/suggestions</code>
            · <code>GET {prefix}/sections</code> · <code>GET {prefix}/health/ready</code></p>
            <nav>
                <a href="/docs">Swagger UI</a>
                <a href="/redoc">ReDoc</a>
            </nav>
        </section>

        <footer>{name} · API at <code>{prefix}</code></footer>
    </main>
    <script>
        (function () {{
            var api = '{prefix}';
            var term = document.getElementById('term');
            var list = document.getElementById('suggestions');
            var results = document.getElementById('results');
            var summary = document.getElementById('summary');
            var timer = null;

            function text(tag, value, cls) {{
                var el = document.createElement(tag);
                el.textContent = value;
                if (cls) el.className = cls;
                return el;
            }}

            function suggest() {{
                var q = term.value;
                list.replaceChildren();
                if (q.trim().length < 2) return;
                fetch(api + '/autocomplete/suggestions?search_term=' + encodeURIComponent(q))
                    .then(function (r) {{ return r.ok ? r.json() : []; }})
                    .then(function (items) {{
                        items.forEach(function (s) {{
                            var li = text('li', s);
                            li.addEventListener('click', function () {{
                                term.value = s;
                                list.replaceChildren();
                                search();
                            }});
                            list.appendChild(li);
                        }});
                    }});
            }}

            function search() {{
                var q = term.value;
                if (!q.trim()) return;
                fetch(api + '/search', {{
                    method: 'POST',
                    headers: {{ 'Content-Type': 'application/json' }},
                    body: JSON.stringify({{ search_term: q, page: 1, page_size: 10 }})
                }})
                    .then(function (r) {{ return r.json(); }})
                    .then(function (data) {{
                        results.replaceChildren();
                        summary.textContent = (data.total_count || 0) + ' result(s)';
                        (data.results || []).forEach(function (p) {{
                            var div = document.createElement('div');
                            div.className = 'result';
                            div.appendChild(text('div', p.content));
                            div.appendChild(text('div',
                                [p.section_name, p.from_ref, p.to_ref, p.author].filter(Boolean).join(' · '),
                                'meta'));
                            results.appendChild(div);
                        }});
                    }});
            }}

            term.addEventListener('input', function () {{
                clearTimeout(timer);
                timer = setTimeout(suggest, 250);
            }});
            document.getElementById('search-form').addEventListener('submit', function (e) {{
                e.preventDefault();
                list.replaceChildren();
                search();
            }});
        }})();
    </script>
</body>
</html>
""".strip()
