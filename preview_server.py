#!/usr/bin/env python3
"""
cabbages.info — Email Preview Server
Accepts POST requests with a CMS entry record and returns the email HTML
subscribers would receive. Nothing is sent or stored.

Usage:
    python3 preview_server.py

Environment variables:
    PREVIEW_TOKEN — Shared secret for authenticating requests
    SITE_URL      — Canonical site URL used for entry permalinks
    PORT          — Port to listen on (default: 8473)
"""

import sys

from flask import Flask, jsonify, request

import site_config
from email_renderer import generate_email_html
from entries import entry_from_record

app = Flask(__name__)


def _authorized() -> bool:
    token = request.headers.get("Authorization", "").replace("Bearer ", "")
    return token == site_config.PREVIEW_TOKEN


@app.route("/preview", methods=["POST"])
def preview():
    # Authenticate
    if not _authorized():
        return jsonify({"error": "Unauthorized"}), 401

    record = request.get_json(silent=True)
    if record is None:
        return jsonify({"error": "Body must be a JSON entry record"}), 400

    try:
        entry = entry_from_record(record)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    html = generate_email_html(entry)
    headers = {"Content-Type": "text/html; charset=utf-8"}
    if entry.email_sent_at:
        headers["X-Email-Sent-At"] = entry.email_sent_at
    return html, 200, headers


@app.route("/preview", methods=["GET"])
def health():
    """Simple health check."""
    return jsonify({
        "status": "running",
        "site_url": site_config.SITE_URL,
    })


if __name__ == "__main__":
    if site_config.PREVIEW_TOKEN == site_config.DEFAULT_PREVIEW_TOKEN:
        print("WARNING: Using default preview token. Set PREVIEW_TOKEN environment variable.",
              file=sys.stderr)
    print(f"Preview endpoint listening on port {site_config.PORT}", file=sys.stderr)
    print(f"Site URL: {site_config.SITE_URL}", file=sys.stderr)
    app.run(host="127.0.0.1", port=site_config.PORT)
