#!/usr/bin/env python3
"""Smoke test for the bookings API against a running server."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"
DAY = "2024-02-01"


def check_slots() -> list[str]:
    """List open slots for DAY."""
    print("=" * 60)
    print(f"Testing GET /api/bookings/slots?date={DAY}")
    print("=" * 60)

    try:
        response = httpx.get(f"{BASE_URL}/api/bookings/slots", params={"date": DAY}, timeout=10.0)
        response.raise_for_status()
        slots = response.json()
        print(f"✅ {len(slots)} open slots: {', '.join(slots)}")
        return slots
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return []
    except Exception as e:
        print(f"❌ Error: {e}")
        return []


def create_booking(time: str) -> str | None:
    """Book the given slot, then try to book it again."""
    print("\n" + "=" * 60)
    print("Testing POST /api/bookings")
    print("=" * 60)

    payload = {
        "service": {"id": "makeup-special", "name": "Makeup Special", "price": "$75.00"},
        "date": DAY,
        "time": time,
        "customer": {"name": "Smoke Test", "email": "smoke@example.com"},
    }

    try:
        response = httpx.post(f"{BASE_URL}/api/bookings", json=payload, timeout=10.0)
        response.raise_for_status()
        booking = response.json()
        print(f"✅ Created booking {booking['id']} at {booking['date']} {booking['time']}")

        again = httpx.post(f"{BASE_URL}/api/bookings", json=payload, timeout=10.0)
        if again.status_code == 409:
            print("✅ Second booking for the same slot rejected with 409")
        else:
            print(f"❌ Expected 409 for duplicate slot, got {again.status_code}")
        return booking["id"]
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except Exception as e:
        print(f"❌ Error: {e}")
        return None


def cleanup(booking_id: str | None) -> None:
    if not booking_id:
        return
    response = httpx.delete(f"{BASE_URL}/api/bookings/{booking_id}", timeout=10.0)
    print(f"\n🧹 Deleted {booking_id}: {response.status_code}")


def main():
    print("\n🚀 Testing Bookings API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn storefront.main:app --reload --port 8001")
        sys.exit(1)

    slots = check_slots()
    booking_id = create_booking(slots[0]) if slots else None
    cleanup(booking_id)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
