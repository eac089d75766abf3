"""
Concurrency Simulation Script

Fires many customer flows at a running server at once. Each simulated
customer registers, logs in, fills a cart, checks out and reads back its
orders. Optionally logs in as admin afterwards and prints the shipped
summary.

Run from project root: python scripts/simulate.py --customers 50

Version: 1.0.0
"""

import asyncio
import sys
import random
import time
import uuid
import argparse
from datetime import datetime
from typing import Any, Optional

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:8080"
TOTAL_CUSTOMERS = 50

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
MENU_ITEMS = [
    {"id": "pizza-margherita", "name": "Pizza Margherita", "price": 14.99},
    {"id": "pizza-pepperoni", "name": "Pepperoni Pizza", "price": 16.99},
    {"id": "salad-caesar", "name": "Caesar Salad", "price": 8.99},
    {"id": "garlic-bread", "name": "Garlic Bread", "price": 5.99},
    {"id": "pasta-carbonara", "name": "Pasta Carbonara", "price": 13.99},
    {"id": "tiramisu", "name": "Tiramisu", "price": 7.99},
]


def generate_customer() -> dict[str, str]:
    """Unique customer credentials for one run."""
    name = f"{random.choice(FIRST_NAMES).lower()}-{uuid.uuid4().hex[:8]}"
    return {"name": name, "password": uuid.uuid4().hex, "email": f"{name}@example.com"}


def generate_cart() -> list[dict]:
    return [random.choice(MENU_ITEMS).copy() for _ in range(random.randint(1, 4))]


# =============================================================================
# CUSTOMER FLOW
# =============================================================================

async def run_customer(base_url: str, customer_num: int) -> dict[str, Any]:
    """Register, log in, fill the cart and place one order."""
    customer = generate_customer()
    start_time = time.time()

    # One client per customer: each keeps its own session cookie
    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        try:
            response = await client.post("/users", json=customer)
            response.raise_for_status()

            response = await client.post(
                "/users/login",
                json={"name": customer["name"], "password": customer["password"]},
            )
            response.raise_for_status()

            cart = generate_cart()
            for item in cart:
                response = await client.post("/cart", json=item)
                response.raise_for_status()

            amount = round(sum(item["price"] for item in cart), 2)
            order_id = f"sim-{uuid.uuid4().hex[:12]}"
            response = await client.post(
                "/orders",
                json={"orderAmount": amount, "orderId": order_id, "userName": customer["name"]},
            )
            response.raise_for_status()

            response = await client.delete("/deleteCart")
            response.raise_for_status()

            response = await client.get("/orders")
            response.raise_for_status()
            own_orders = [o["orderId"] for o in response.json()]

            return {
                "customer_num": customer_num,
                "success": own_orders == [order_id],
                "order_id": order_id,
                "total": amount,
                "time": round(time.time() - start_time, 3),
                "error": None if own_orders == [order_id] else f"unexpected orders {own_orders}",
            }
        except httpx.HTTPError as e:
            detail = e.response.text[:100] if isinstance(e, httpx.HTTPStatusError) else str(e)[:100]
            return {
                "customer_num": customer_num,
                "success": False,
                "time": round(time.time() - start_time, 3),
                "error": detail,
            }


async def fetch_admin_summary(
    base_url: str, admin_name: str, admin_password: str
) -> Optional[dict[str, Any]]:
    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        response = await client.post(
            "/admin/login", json={"name": admin_name, "password": admin_password}
        )
        if response.status_code != 200:
            print(f"   ❌ Admin login failed: {response.text[:100]}")
            return None

        orders = (await client.get("/admin/orders")).json()
        summary = (await client.get("/api/getTotalShippedOrders")).json()
        return {"orders": len(orders), "shipped": summary}


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(
    base_url: str = API_BASE_URL,
    num_customers: int = TOTAL_CUSTOMERS,
    admin_name: Optional[str] = None,
    admin_password: Optional[str] = None,
) -> dict[str, Any]:
    """
    Run the simulation.

    Args:
        base_url: Server to target
        num_customers: Number of concurrent customer flows
        admin_name/admin_password: Admin credentials for the final report
    """
    print("=" * 70)
    print("🔥 CONCURRENCY SIMULATION")
    print("=" * 70)
    print(f"📋 Customers: {num_customers}")
    print(f"🎯 Target: {base_url}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        response = await client.get("/health")
        if response.status_code != 200 or response.json().get("database") != "healthy":
            print(f"\n❌ Server not healthy: {response.text[:100]}")
            return {"total": num_customers, "successful": 0, "failed": num_customers}

    start_time = time.time()
    results = await asyncio.gather(
        *(run_customer(base_url, i + 1) for i in range(num_customers))
    )
    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful Flows: {len(successful)}/{num_customers}")
    print(f"❌ Failed Flows: {len(failed)}/{num_customers}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Flow: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   💰 Ordered Total: ${sum(r['total'] for r in successful):.2f}")

    if failed:
        print(f"\n⚠️  Failed Flow Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Customer #{f['customer_num']}: {f.get('error', 'Unknown error')}")

    if admin_name and admin_password:
        print("\n🔐 Admin view...")
        report = await fetch_admin_summary(base_url, admin_name, admin_password)
        if report:
            print(f"   Orders in store: {report['orders']}")
            print(f"   Shipped: {report['shipped']}")

    print("=" * 70)

    return {
        "total": num_customers,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency Simulation Script")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    parser.add_argument("--customers", type=int, default=TOTAL_CUSTOMERS, help="Number of customers")
    parser.add_argument("--admin-name", default=None, help="Admin name for the final report")
    parser.add_argument("--admin-password", default=None, help="Admin password for the final report")
    args = parser.parse_args()

    outcome = asyncio.run(
        run_simulation(args.url, args.customers, args.admin_name, args.admin_password)
    )
    sys.exit(0 if outcome["failed"] == 0 else 1)
