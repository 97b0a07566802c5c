#!/usr/bin/env python3
"""
Aftercare Quickstart: a patient's first week in one script.

Signs up → sets the surgery date → reads the brochure → ticks checklist
items → logs symptoms → prints a progress summary.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:3007
"""

from datetime import date, timedelta

from _common import create_client


def main():
    client = create_client()

    # ── Surgery date ──────────────────────────────────────────────
    print("\n1. Setting surgery date (4 days ago)...")
    surgery = (date.today() - timedelta(days=4)).isoformat()
    resp = client.patch("/auth/surgery-date", json={"surgeryDate": surgery})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    user = resp.json()["data"]["user"]
    print(f"   Recovery day: {user['recoveryDay']}")

    # ── Brochure ──────────────────────────────────────────────────
    print("\n2. Reading the brochure...")
    resp = client.get("/brochures/myomectomy")
    sections = resp.json()["data"]
    for section in sections:
        items = sum(len(block["items"]) for block in section["content"])
        print(f"   {section['title']:<30} {items} items")

    # ── Checklist ─────────────────────────────────────────────────
    print("\n3. Ticking off the first block of activity restrictions...")
    first_block = sections[0]["content"][0]
    for item in first_block["items"]:
        resp = client.post("/brochures/progress", json={
            "sectionId": sections[0]["id"],
            "itemId": item["id"],
            "completed": True,
        })
        assert resp.status_code == 200, f"Failed: {resp.text}"
        print(f"   ✓ {item['text']}")

    # ── Symptom diary ─────────────────────────────────────────────
    print("\n4. Logging symptoms...")
    for offset, pain in ((2, 6), (1, 4), (0, 3)):
        resp = client.post("/tracker", json={
            "date": (date.today() - timedelta(days=offset)).isoformat(),
            "painLevel": pain,
            "location": "Lower abdomen",
        })
        assert resp.status_code == 201, f"Failed: {resp.text}"
    entries = client.get("/tracker").json()["data"]
    for entry in entries:
        print(f"   {entry['date']}  pain {entry['painLevel']}/10")

    # ── Summary ───────────────────────────────────────────────────
    print("\n5. Progress summary...")
    summary = client.get("/brochures/progress/summary").json()["data"]
    print(
        f"   {summary['completedItems']}/{summary['totalItems']} items "
        f"({summary['progressPercentage']}%)"
    )

    print("\nDone.")


if __name__ == "__main__":
    main()
