"""
Single-page search form served by the proxy itself.

The page talks to ``/api/search/{code}`` from the browser and moves between
the idle, loading, success, empty and error states.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

IDLE_MESSAGE = "Enter a part code and press Search."

SEARCH_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Auto Parts Search</title>
  <style>
    body { font-family: system-ui, sans-serif; margin: 0 auto; max-width: 960px; padding: 2rem 1rem; color: #1f2933; }
    .hero h1 { margin-bottom: 0.25rem; }
    .search { margin: 1.5rem 0 1rem; }
    .search__label { display: block; font-weight: 600; margin-bottom: 0.5rem; }
    .search__controls { display: flex; gap: 0.5rem; }
    .search__input { flex: 1; padding: 0.5rem 0.75rem; font-size: 1rem; }
    .search__button { padding: 0.5rem 1.25rem; font-size: 1rem; cursor: pointer; }
    .search__button:disabled { cursor: not-allowed; opacity: 0.6; }
    .status { padding: 0.75rem 1rem; border-radius: 4px; background: #f0f4f8; }
    .status--loading { background: #e3f2fd; }
    .status--success { background: #e3f9e5; }
    .status--empty { background: #fffbea; }
    .status--error { background: #ffe3e3; color: #8a041a; }
    .results { width: 100%; border-collapse: collapse; margin-top: 1rem; }
    .results th, .results td { border-bottom: 1px solid #d9e2ec; padding: 0.5rem; text-align: left; }
  </style>
</head>
<body>
  <header class="hero">
    <h1>Auto Parts Search</h1>
    <p>Enter a part code to list the matching catalog items.</p>
  </header>

  <form class="search" id="search-form">
    <label class="search__label" for="search-code">Part code</label>
    <div class="search__controls">
      <input id="search-code" type="text" class="search__input"
             placeholder="For example, 4477 or OC90" autocomplete="off">
      <button type="submit" id="search-button" class="search__button" disabled>Search</button>
    </div>
  </form>

  <div id="status" class="status status--idle" role="status">__IDLE_MESSAGE__</div>

  <div class="table-wrapper" id="results-wrapper" hidden>
    <table class="results">
      <thead>
        <tr><th>ID</th><th>Article</th><th>Manufacturer</th><th>Name</th></tr>
      </thead>
      <tbody id="results-body"></tbody>
    </table>
  </div>

  <script>
    (function () {
      const IDLE_MESSAGE = "__IDLE_MESSAGE__";
      const form = document.getElementById("search-form");
      const input = document.getElementById("search-code");
      const button = document.getElementById("search-button");
      const statusBox = document.getElementById("status");
      const wrapper = document.getElementById("results-wrapper");
      const body = document.getElementById("results-body");
      let loading = false;

      function syncControls() {
        input.disabled = loading;
        button.disabled = loading || input.value.trim().length === 0;
        button.textContent = loading ? "Searching..." : "Search";
      }

      function setStatus(type, message) {
        loading = type === "loading";
        statusBox.className = "status status--" + type;
        statusBox.textContent = message;
        syncControls();
      }

      function renderItems(items) {
        body.replaceChildren();
        for (const item of items) {
          const row = document.createElement("tr");
          for (const key of ["id", "article", "manufacturer", "name"]) {
            const cell = document.createElement("td");
            cell.textContent = item[key] == null ? "" : String(item[key]);
            row.appendChild(cell);
          }
          body.appendChild(row);
        }
        wrapper.hidden = items.length === 0;
      }

      async function search(rawCode) {
        const code = rawCode.trim();
        if (!code) {
          renderItems([]);
          setStatus("idle", IDLE_MESSAGE);
          return;
        }

        setStatus("loading", "Loading...");
        try {
          const response = await fetch("/api/search/" + encodeURIComponent(code));
          if (!response.ok) {
            const payload = await response.json().catch(() => ({}));
            throw new Error(payload.message || "Search failed");
          }
          const payload = await response.json();
          const items = Array.isArray(payload.items) ? payload.items : [];
          renderItems(items);
          if (items.length === 0) {
            setStatus("empty", "Nothing found");
          } else {
            setStatus("success", "Found " + items.length + " items");
          }
        } catch (error) {
          const message = error instanceof Error && error.message
            ? error.message
            : "Something went wrong. Please try again";
          setStatus("error", message);
        }
      }

      input.addEventListener("input", syncControls);
      form.addEventListener("submit", function (event) {
        event.preventDefault();
        if (!loading) {
          search(input.value);
        }
      });
      syncControls();
    })();
  </script>
</body>
</html>
""".replace("__IDLE_MESSAGE__", IDLE_MESSAGE)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def search_page() -> HTMLResponse:
    """Serve the part search form."""
    return HTMLResponse(SEARCH_PAGE)
