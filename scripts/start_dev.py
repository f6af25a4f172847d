#!/usr/bin/env python3
"""
Development startup script.

Starts the mock commerce service and runs a short cart session against it.
"""

import os
import sys
import asyncio
import subprocess
import time
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def check_dependencies():
    """Check if required dependencies are installed."""
    try:
        import fastapi
        import uvicorn
        import httpx
        import pydantic_settings
        print("✓ All core dependencies installed")
        return True
    except ImportError as e:
        print(f"✗ Missing dependency: {e.name}")
        print("\nRun: pip install -e .")
        return False


def check_env():
    """Check if .env file exists."""
    env_file = PROJECT_ROOT / "config" / ".env"
    env_example = PROJECT_ROOT / "config" / ".env.example"

    if env_file.exists():
        print("✓ Configuration file found")
        return True
    elif env_example.exists():
        print("! Configuration file not found, copying from example...")
        import shutil
        shutil.copy(env_example, env_file)
        print("✓ Created config/.env from example")
        return True
    else:
        print("✗ No configuration file found")
        return False


async def smoke_test(base_url: str):
    """Walk a cart through add, update, coupon and clear."""
    from storefront.services import CartManager, CommerceClient

    async with CommerceClient(base_url, access_token="dev-session") as client:
        manager = CartManager(client, mock_fallback=False)
        manager.subscribe(lambda m: print(f"  cart changed: {m.item_count} items"))

        await manager.fetch_cart()
        cart = await manager.add_item(15, quantity=1)
        cart = await manager.add_item(23, quantity=2)
        cart = await manager.update_quantity(cart.items[0].id, 2)
        cart = await manager.apply_coupon("WELCOME10")
        print(
            f"  items={cart.item_count} subtotal={cart.subtotal} "
            f"discount={cart.discount} shipping={cart.shipping} total={cart.total}"
        )
        await manager.clear_cart()
        print(f"  cleared, items={manager.item_count}")


def start_services(port: int = 8010):
    """Start the mock commerce service in development mode."""
    base_url = f"http://localhost:{port}"
    process = None

    try:
        print(f"\n🏪 Starting Mock Commerce on {base_url} ...")
        process = subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn",
                "mock_commerce.main:app",
                "--reload",
                "--host", "0.0.0.0",
                "--port", str(port),
            ],
            cwd=PROJECT_ROOT,
            env={**os.environ, "PYTHONPATH": str(PROJECT_ROOT)},
        )

        # Wait a bit for the service to start
        time.sleep(2)

        print("\n🛒 Running cart smoke test ...")
        asyncio.run(smoke_test(base_url))

        print("\n" + "=" * 60)
        print("Mock Commerce is running")
        print("=" * 60)
        print(f"\n📍 Commerce API: {base_url}/docs")
        print("\nPress Ctrl+C to stop")
        print("=" * 60)

        process.wait()

    except KeyboardInterrupt:
        print("\n\nShutting down...")
        if process:
            process.terminate()
            process.wait()
        print("Stopped.")


def main():
    print("=" * 60)
    print("Storefront - Development Server")
    print("=" * 60)

    # Pre-flight checks
    print("\nRunning pre-flight checks...")

    if not check_dependencies():
        sys.exit(1)

    if not check_env():
        sys.exit(1)

    print("\n✓ All checks passed!")

    start_services(int(os.getenv("PORT", "8010")))


if __name__ == "__main__":
    main()
