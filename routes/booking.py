import csv
import io

from flask import Blueprint, Response, current_app, request, jsonify, render_template_string

from models import db
from security import policy
from security.policy import require_permission
from security.rate_limit import rate_limited
from services import bookings as booking_service
from services.errors import NotFound
from utils.api_errors import api_errors
from utils.audit import log_event
from utils.serializers import booking_json

booking_bp = Blueprint("booking", __name__, url_prefix="/api")

CSV_COLUMNS = [
    "booking_id", "date", "time", "duration", "full_name", "email", "phone",
    "address", "plz", "city", "units", "note", "created_at",
]

PRINT_TEMPLATE = """<!doctype html>
<html><head><meta charset="utf-8">
<title>Terminbestätigung – {{ brand }}</title>
<style>
  body{font-family:Arial, sans-serif; margin:40px;}
  h1{margin:0 0 10px}
  .box{border:1px solid #ddd; padding:16px; border-radius:12px}
  .grid{display:grid; grid-template-columns:160px 1fr; gap:8px 16px}
  .muted{color:#666}
  button{padding:8px 14px; border-radius:8px; border:1px solid #ccc; background:#f8f8f8}
</style></head><body>
  <h1>{{ brand }} – Terminbestätigung</h1>
  <p class="muted">Buchungsnummer #{{ b.id }}</p>
  <div class="box">
    <div class="grid">
      <div><b>Datum</b></div><div>{{ b.date }}</div>
      <div><b>Uhrzeit</b></div><div>{{ b.time }}</div>
      <div><b>Dauer</b></div><div>{{ b.duration }} Min.</div>
      <div><b>Name</b></div><div>{{ b.full_name }}</div>
      <div><b>E-Mail</b></div><div>{{ b.email }}</div>
      <div><b>Telefon</b></div><div>{{ b.phone }}</div>
      <div><b>Adresse</b></div><div>{{ b.address }}</div>
      <div><b>PLZ / Stadt</b></div><div>{{ b.plz }} {{ b.city }}</div>
      {% if b.units is not none %}<div><b>Einheiten</b></div><div>{{ b.units }}</div>{% endif %}
      <div><b>Notiz</b></div><div>{{ b.note or '–' }}</div>
      <div><b>Erstellt am</b></div><div>{{ b.created_at }}</div>
    </div>
  </div>
  <p><button onclick="window.print()">Drucken</button></p>
</body></html>"""


# ---------- PUBLIC: book a slot ----------
@booking_bp.post("/bookings")
@api_errors("booking_failed")
def create_booking():
    limited = rate_limited("booking")
    if limited:
        return limited

    data = request.get_json(silent=True) or {}
    result = booking_service.create_booking(
        db.session,
        current_app.extensions["notifier"],
        data.get("slotId"),
        data,
    )
    log_event("BOOKING_CREATE", entity="booking", entity_id=result["bookingId"], metadata={"slot_id": result["slotId"]})
    return jsonify(result), 201


# ---------- PUBLIC: printable confirmation ----------
@booking_bp.get("/bookings/<int:booking_id>/print")
def print_booking(booking_id: int):
    try:
        booking, slot = booking_service.get_booking_with_slot(db.session, booking_id)
    except NotFound:
        return Response("Nicht gefunden", status=404, mimetype="text/plain")

    html = render_template_string(
        PRINT_TEMPLATE,
        brand=current_app.config.get("BRAND_NAME") or "MyDienst",
        b=booking_json(booking, slot),
    )
    return Response(html, mimetype="text/html")


# ---------- STAFF: CSV export of open bookings ----------
@booking_bp.get("/bookings.csv")
@require_permission(policy.BOOKING_EXPORT)
@api_errors("csv_failed")
def export_csv():
    rows = booking_service.list_open_bookings(
        db.session, request.args.get("from"), request.args.get("to")
    )

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for booking, slot in rows:
        data = booking_json(booking, slot)
        data["booking_id"] = data["id"]
        writer.writerow(["" if data[col] is None else data[col] for col in CSV_COLUMNS])

    return Response(
        buf.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": 'attachment; filename="bookings.csv"'},
    )
