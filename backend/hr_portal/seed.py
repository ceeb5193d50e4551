"""Load development data through the HTTP API.

Run with:  python -m hr_portal.seed
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta
from typing import Any

import httpx

BASE_URL = "http://localhost:8000"
COMPANY_ID = "00000000-0000-0000-0000-000000000001"
HR_USER_ID = "00000000-0000-0000-0000-000000000001"

HEADERS = {
    "Content-Type": "application/json",
    "X-Company-Id": COMPANY_ID,
    "X-User-Id": HR_USER_ID,
}

MARIA_ID = "00000000-0000-0000-0000-000000000002"
JOSE_ID = "00000000-0000-0000-0000-000000000003"
ANA_ID = "00000000-0000-0000-0000-000000000004"
CARLOS_ID = "00000000-0000-0000-0000-000000000005"

EMPLOYEES = [
    {
        "id": MARIA_ID,
        "first_name": "María",
        "last_name": "Hernández",
        "email": "maria.hernandez@example.com",
        "national_id": "0801-1985-01234",
        "position": "Contadora",
        "start_date": "2016-02-29",
        "monthly_salary": "28500.00",
    },
    {
        "id": JOSE_ID,
        "first_name": "José",
        "last_name": "Martínez",
        "email": "jose.martinez@example.com",
        "national_id": "0501-1990-04567",
        "position": "Analista de sistemas",
        "start_date": "2021-08-16",
        "monthly_salary": "22000.00",
    },
    {
        "id": ANA_ID,
        "first_name": "Ana",
        "last_name": "López",
        "email": "ana.lopez@example.com",
        "national_id": "0801-1995-07890",
        "position": "Asistente administrativa",
        "start_date": "2024-01-08",
        "monthly_salary": "15000.00",
    },
    {
        "id": CARLOS_ID,
        "first_name": "Carlos",
        "last_name": "Reyes",
        "email": "carlos.reyes@example.com",
        "national_id": None,
        "position": "Bodeguero",
        "start_date": None,
        "monthly_salary": "12500.00",
    },
]

HOLIDAYS = [
    {"date": "2026-06-11", "name": "Aniversario de la empresa"},
    {"date": "2026-12-24", "name": "Nochebuena"},
    {"date": "2026-12-31", "name": "Fin de año"},
]


def _next_weekday(start: date, days_ahead: int) -> date:
    candidate = start + timedelta(days=days_ahead)
    while candidate.weekday() >= 5:
        candidate += timedelta(days=1)
    return candidate


async def _safe_post(client: httpx.AsyncClient, url: str, json: dict[str, Any], label: str) -> dict[str, Any] | None:
    """POST, treating 409 as already seeded."""
    resp = await client.post(url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} (already exists)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_employees(client: httpx.AsyncClient) -> None:
    print("\n--- Seeding employees ---")
    for emp in EMPLOYEES:
        body = {k: v for k, v in emp.items() if k != "id"}
        resp = await client.put(
            f"{BASE_URL}/companies/{COMPANY_ID}/employees/{emp['id']}",
            json=body,
            headers=HEADERS,
        )
        label = f"{emp['first_name']} {emp['last_name']}"
        if resp.status_code == 200:
            print(f"  [OK] {label}")
        else:
            print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")


async def seed_holidays(client: httpx.AsyncClient) -> None:
    print("\n--- Seeding company holidays ---")
    for holiday in HOLIDAYS:
        await _safe_post(
            client,
            f"{BASE_URL}/companies/{COMPANY_ID}/holidays",
            holiday,
            f"Holiday: {holiday['name']}",
        )


async def seed_leave_requests(client: httpx.AsyncClient) -> None:
    """One approved past vacation for María, one pending for José, one sick day for Ana."""
    print("\n--- Seeding leave requests ---")
    today = date.today()
    base = f"{BASE_URL}/companies/{COMPANY_ID}/leave-requests"

    maria_start = _next_weekday(today, -30)
    result = await _safe_post(
        client,
        base,
        {
            "employee_id": MARIA_ID,
            "leave_type": "VACATION",
            "start_date": maria_start.isoformat(),
            "end_date": (maria_start + timedelta(days=4)).isoformat(),
            "reason": "Vacaciones familiares",
        },
        "Leave: María 5-day vacation",
    )
    if result:
        resp = await client.post(f"{base}/{result['id']}/approve", json={"comments": "Aprobado"}, headers=HEADERS)
        if resp.status_code == 200:
            print("  [OK] Approved María's vacation")
        else:
            print(f"  [ERROR] Approving María's vacation: {resp.status_code}")

    jose_start = _next_weekday(today, 21)
    await _safe_post(
        client,
        base,
        {
            "employee_id": JOSE_ID,
            "leave_type": "VACATION",
            "start_date": jose_start.isoformat(),
            "end_date": (jose_start + timedelta(days=2)).isoformat(),
            "reason": "Viaje",
        },
        "Leave: José 3-day vacation (PENDING)",
    )

    ana_day = _next_weekday(today, -10)
    await _safe_post(
        client,
        base,
        {
            "employee_id": ANA_ID,
            "leave_type": "SICK",
            "start_date": ana_day.isoformat(),
            "end_date": ana_day.isoformat(),
            "reason": "Cita médica",
        },
        "Leave: Ana 1-day sick leave (PENDING)",
    )


async def main() -> None:
    print("=" * 60)
    print("  HR Portal: development seed")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            sys.exit(1)
        if resp.status_code != 200:
            print(f"API health check failed: {resp.status_code}")
            sys.exit(1)
        print("\n[OK] API is healthy")

        await seed_employees(client)
        await seed_holidays(client)
        await seed_leave_requests(client)

    print("\n" + "=" * 60)
    print("  Seeding complete")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
