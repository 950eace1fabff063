#!/usr/bin/env python3
"""Demo-Request gegen einen laufenden Server (POST /review)"""

import json
import sys

import requests

BASE_URL = "http://localhost:8000"

payload = {
    "document_text": (
        "I strode straight down the sweeping tree-lined curve of Georgian terraced "
        "that lies to one side of the little city park. The sun was intense and I was "
        "trying not squint, just walk tall and straight into it."
    ),
    "llm_model": "gpt-4o-mini",
    "dictionary": [],
}

print("=" * 70)
print("INPUT:")
print("=" * 70)
print(json.dumps(payload, indent=2, ensure_ascii=False))
print()

try:
    response = requests.post(f"{BASE_URL}/review", json=payload, timeout=120)
    response.raise_for_status()
    result = response.json()
except requests.exceptions.ConnectionError:
    print(f"❌ Server nicht erreichbar unter {BASE_URL}")
    print("   Bitte starten Sie den Server mit: uvicorn prose_review.server:app")
    sys.exit(1)
except requests.exceptions.RequestException as e:
    print(f"❌ Fehler: {e}")
    sys.exit(1)

print("=" * 70)
print("OUTPUT: SUMMARY")
print("=" * 70)
print(f"  Status:      {result['status']}")
print(f"  Summary:     {result['summary']}")
print(f"  Quick Fixes: {result['num_quick_fixes']}")
print(f"  Unlocated:   {result['num_unlocated']}")
print()

print("=" * 70)
print("OUTPUT: DIAGNOSTICS (markierte Textstellen)")
print("=" * 70)
text = payload["document_text"]
for d in result["diagnostics"]:
    span = d["span"]
    print(f"  [{d.get('diagnostic_id') or '-'}] {d['display_severity']} ({d['category']})")
    print(f"    Position: Zeichen {span['start_char']} bis {span['end_char']} ({span['kind']})")
    print(f"    Markiert: {text[span['start_char']:span['end_char']]!r}")
    print(f"    Problem:  {d['message'][:80]}")
    if d.get("rewrite"):
        print(f"    Fix:      {d['rewrite'][:80]}")
    print()

print("=" * 70)
print("✅ Demo abgeschlossen")
print("=" * 70)
