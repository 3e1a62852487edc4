from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify, Response
from phrasebook.engine import Engine
from phrasebook.config import SUGGESTION_LIMIT, DEFAULT_DSN
from phrasebook import export

app = Flask(__name__)
_engine: Engine | None = None

log = logging.getLogger(__name__)


def _eng() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call open() first.")
    return _engine


def _bad_request(msg: str):
    return jsonify({"error": msg}), 400


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(name: str) -> str | None:
    value = _body().get(name)
    return value if isinstance(value, str) else None

# ---------- API: suggestions ----------
@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", SUGGESTION_LIMIT, type=int)
    return jsonify(_eng().suggest(q, limit=k))

# ---------- API: catalog ----------
@app.get("/api/items")
def api_items():
    return jsonify(list(_eng().catalog.items))


@app.post("/api/items")
def api_items_add():
    phrase = _text_field("phrase")
    if phrase is None:
        return _bad_request("expected JSON body {\"phrase\": \"...\"}")
    added = _eng().catalog.add(phrase)
    return jsonify({"added": added, "items": list(_eng().catalog.items)})


@app.delete("/api/items")
def api_items_remove():
    phrase = _text_field("phrase")
    if phrase is None:
        return _bad_request("expected JSON body {\"phrase\": \"...\"}")
    removed = _eng().catalog.remove(phrase)
    return jsonify({"removed": removed})


@app.post("/api/items/import")
def api_items_import():
    text = _text_field("text")
    if text is None:
        return _bad_request("expected JSON body {\"text\": \"line\\nline\"}")
    added = _eng().catalog.bulk_import(text)
    return jsonify({"added": added, "count": len(_eng().catalog)})


@app.post("/api/items/reset")
def api_items_reset():
    _eng().catalog.reset_to_default()
    return jsonify(list(_eng().catalog.items))


@app.get("/api/items/custom")
def api_custom():
    q = request.args.get("q", "", type=str)
    return jsonify(_eng().custom_items(q))


@app.delete("/api/items/custom")
def api_custom_clear():
    # the browser asks the user before calling this
    removed = _eng().clear_custom(lambda _msg: True)
    return jsonify({"removed": removed})


@app.get("/api/items/custom/export")
def api_custom_export():
    fmt = request.args.get("fmt", "txt", type=str)
    q = request.args.get("q", "", type=str)
    if fmt not in export.MIME_TYPES:
        return _bad_request(f"unsupported format: {fmt}")
    out: dict = {}

    def download(filename: str, content: str, mime: str) -> None:
        out.update(filename=filename, content=content, mime=mime)

    _eng().export_custom(fmt, download, query=q)
    return Response(
        out["content"],
        mimetype=out["mime"],
        headers={"Content-Disposition": f'attachment; filename="{out["filename"]}"'},
    )

# ---------- API: result rows ----------
@app.get("/api/rows")
def api_rows():
    return jsonify(list(_eng().rows.rows))


@app.post("/api/rows")
def api_rows_append():
    # called after the browser clipboard write succeeded
    phrase = _text_field("phrase")
    if phrase is None:
        return _bad_request("expected JSON body {\"phrase\": \"...\"}")
    _eng().rows.append(phrase)
    return jsonify(list(_eng().rows.rows))


@app.delete("/api/rows")
def api_rows_clear():
    _eng().rows.clear()
    return jsonify([])


@app.delete("/api/rows/<int:index>")
def api_rows_remove(index: int):
    removed = _eng().rows.remove_at(index)
    return jsonify({"removed": removed, "rows": list(_eng().rows.rows)})


@app.get("/api/rows/payload")
def api_rows_payload():
    layout = request.args.get("layout", "column", type=str)
    try:
        payload = _eng().rows_payload(layout)
    except ValueError as exc:
        return _bad_request(str(exc))
    return Response(payload, mimetype="text/plain")

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny SPA: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Phrase Picker</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --accent-2:#22d3ee; --border:#1c2530; --ok:#45d483;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; margin-bottom:16px;
}
h1,h2{ font-size:18px; margin:0 0 8px 0 }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0; flex-wrap:wrap }
input,textarea{
  width:100%; padding:10px 12px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:15px;
}
input:focus,textarea:focus{ border-color:var(--accent) }
.btn{
  padding:8px 12px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); cursor:pointer;
}
.btn:hover{ border-color:var(--accent-2) }
.row{ padding:8px 12px; border-top:1px solid var(--border); cursor:pointer; display:flex; justify-content:space-between }
.row:first-child{ border-top:none }
.row.selected{ background:#0d131a; border-left:3px solid var(--accent) }
.list{ margin-top:10px; border:1px solid var(--border); border-radius:12px; max-height:40vh; overflow:auto }
.empty{ padding:16px; text-align:center; color:var(--muted) }
.ok{ color:var(--ok); min-height:1.4em }
kbd{ background:#111825; border:1px solid var(--border); padding:1px 6px; border-radius:6px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Phrase Picker</h1>
      <div class="controls"><input id="q" type="text" placeholder="Type to search… e.g. CARTON BOX NO." autocomplete="off" autofocus /></div>
      <div class="small">Arrows to move • <kbd>Enter</kbd> copy • <kbd>Tab</kbd> complete • <kbd>Esc</kbd> clear</div>
      <div id="out" class="list"></div>
      <div id="flash" class="ok"></div>
    </div>
    <div class="card">
      <h2>Copied rows</h2>
      <div class="controls">
        <button class="btn" id="copyCol">Copy all (column)</button>
        <button class="btn" id="copyRow">Copy all (row)</button>
        <button class="btn" id="clearRows">Clear</button>
      </div>
      <div id="rows" class="list"></div>
    </div>
    <div class="card">
      <h2>Catalog</h2>
      <div class="controls">
        <input id="newWord" type="text" placeholder="Add one phrase" style="flex:1" />
        <button class="btn" id="add">Add</button>
        <button class="btn" id="reset">Reset to defaults</button>
      </div>
      <textarea id="bulk" rows="4" placeholder="Paste one phrase per line, then Import"></textarea>
      <div class="controls"><button class="btn" id="import">Import</button></div>
    </div>
    <div class="card">
      <h2>Custom phrases</h2>
      <div class="controls">
        <input id="cq" type="text" placeholder="Filter custom phrases…" style="flex:1" />
        <button class="btn" id="copyCustom">Copy</button>
        <button class="btn" id="txt">.txt</button>
        <button class="btn" id="csv">.csv</button>
        <button class="btn" id="clearCustom">Remove all</button>
      </div>
      <div id="custom" class="list"></div>
    </div>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), flash = $("#flash");
let suggestions = [], selected = -1, t, flashTimer;

function esc(s){ return s.replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
async function api(method, url, body){
  const resp = await fetch(url, {method, headers:{"Content-Type":"application/json"},
                                 body: body === undefined ? undefined : JSON.stringify(body)});
  if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
  const type = resp.headers.get("Content-Type") || "";
  return type.includes("json") ? resp.json() : resp.text();
}
function renderList(el, items, onClick, extra){
  if(!items.length){ el.innerHTML = '<div class="empty">Nothing here.</div>'; return; }
  el.innerHTML = items.map((s,i)=>`<div class="row${extra && extra(i) ? " selected" : ""}" data-i="${i}"><span>${esc(s)}</span></div>`).join("");
  el.querySelectorAll(".row").forEach(r => r.addEventListener("click", () => onClick(+r.dataset.i)));
}
function renderSuggestions(){
  renderList(out, suggestions, i => copy(suggestions[i]), i => i === selected);
}
async function search(){
  suggestions = await api("GET", `/api/suggest?q=${encodeURIComponent(q.value)}`);
  selected = suggestions.length ? 0 : -1;
  renderSuggestions();
}
async function copy(text){
  try{
    await navigator.clipboard.writeText(text);
  }catch(e){
    alert("Copy failed\n" + (e.message ?? e));
    return;
  }
  flash.textContent = `Copied: ${text}`;
  clearTimeout(flashTimer);
  flashTimer = setTimeout(() => flash.textContent = "", 1200);
  renderRows(await api("POST", "/api/rows", {phrase: text}));
}
function renderRows(rows){
  renderList($("#rows"), rows, async i => renderRows((await api("DELETE", `/api/rows/${i}`)).rows));
}
async function loadRows(){ renderRows(await api("GET", "/api/rows")); }
async function loadCustom(){
  const items = await api("GET", `/api/items/custom?q=${encodeURIComponent($("#cq").value)}`);
  renderList($("#custom"), items, async i => {
    await api("DELETE", "/api/items", {phrase: items[i]});
    refresh();
  });
}
function refresh(){ search(); loadCustom(); }
async function copyPayload(layout, message){
  const payload = await api("GET", `/api/rows/payload?layout=${layout}`);
  await navigator.clipboard.writeText(payload);
  alert(message);
}

q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 120); });
q.addEventListener("keydown", (ev) => {
  if(ev.key === "Escape"){ q.value = ""; search(); return; }
  if(!suggestions.length) return;
  if(ev.key === "ArrowDown"){ ev.preventDefault(); selected = (selected + 1) % suggestions.length; renderSuggestions(); }
  else if(ev.key === "ArrowUp"){ ev.preventDefault(); selected = (selected - 1 + suggestions.length) % suggestions.length; renderSuggestions(); }
  else if(ev.key === "Enter"){ ev.preventDefault(); if(selected >= 0) copy(suggestions[selected]); }
  else if(ev.key === "Tab" && selected >= 0){ ev.preventDefault(); q.value = suggestions[selected]; search(); }
});
$("#copyCol").addEventListener("click", () => copyPayload("column", "Copied all rows as one column."));
$("#copyRow").addEventListener("click", () => copyPayload("row", "Copied all rows as one tab-separated row."));
$("#clearRows").addEventListener("click", async () => { await api("DELETE", "/api/rows"); loadRows(); });
$("#add").addEventListener("click", async () => { await api("POST", "/api/items", {phrase: $("#newWord").value}); $("#newWord").value = ""; refresh(); });
$("#reset").addEventListener("click", async () => { await api("POST", "/api/items/reset"); refresh(); });
$("#import").addEventListener("click", async () => { await api("POST", "/api/items/import", {text: $("#bulk").value}); $("#bulk").value = ""; refresh(); });
$("#cq").addEventListener("input", loadCustom);
$("#copyCustom").addEventListener("click", async () => {
  const items = await api("GET", `/api/items/custom?q=${encodeURIComponent($("#cq").value)}`);
  await navigator.clipboard.writeText(items.join("\n"));
  alert("Copied custom phrases.");
});
$("#txt").addEventListener("click", () => location.href = `/api/items/custom/export?fmt=txt&q=${encodeURIComponent($("#cq").value)}`);
$("#csv").addEventListener("click", () => location.href = `/api/items/custom/export?fmt=csv&q=${encodeURIComponent($("#cq").value)}`);
$("#clearCustom").addEventListener("click", async () => {
  const items = await api("GET", "/api/items/custom");
  if(!items.length) return;
  if(confirm(`Remove all ${items.length} custom phrases?`)){ await api("DELETE", "/api/items/custom"); refresh(); }
});
refresh(); loadRows();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--db", dest="db", default=DEFAULT_DSN)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _engine
    _engine = Engine().open(args.db)
    log.info("Serving phrase picker on http://%s:%d", args.host, args.port)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
