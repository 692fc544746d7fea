#!/usr/bin/env python3
"""
seed.py: run Alembic migrations and load a demo catalog for local dev
"""
import argparse, subprocess
from pathlib import Path

DEMO_PRODUCTS = [
    # (id, name, price, discount, weight kg)
    ("argan-oil-100", "Argan Oil 100ml", 24.0, None, 0.3),
    ("berber-rug-s", "Berber Rug (small)", 180.0, 10.0, 4.5),
    ("tagine-pot", "Ceramic Tagine", 45.0, None, 2.0),
    ("leather-pouf", "Leather Pouf", 95.0, 15.0, 1.8),
]

def run_alembic(repo_root: Path):
    print(">>> Running Alembic migrations")
    subprocess.run(["alembic", "upgrade", "head"], cwd=repo_root, check=True)

def seed_demo(admin_email: str, customer_email: str):
    from storefront.core.auth import create_access_token
    from storefront.db.models import Product, User
    from storefront.db.session import SessionLocal

    db = SessionLocal()
    try:
        tokens = {}
        for email, role in ((admin_email, "ADMIN"), (customer_email, "USER")):
            user = db.query(User).filter(User.email == email).first()
            if not user:
                user = User(email=email, name=email.split("@")[0], role=role)
                db.add(user); db.commit(); db.refresh(user)
            tokens[email], _ = create_access_token(user.id, user.role)
        for pid, name, price, discount, weight in DEMO_PRODUCTS:
            if not db.get(Product, pid):
                db.add(Product(id=pid, name=name, price=price, discount=discount, weight=weight))
        db.commit()
    finally:
        db.close()

    for email, token in tokens.items():
        print(f"{email}: {token}")

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--skip-migrate", action="store_true", help="Only load demo data")
    ap.add_argument("--admin", default="admin@example.com")
    ap.add_argument("--customer", default="cust@example.com")
    args = ap.parse_args()

    repo_root = Path(__file__).resolve().parents[1]
    if not args.skip_migrate:
        run_alembic(repo_root)
    print(">>> Seeding demo users and products")
    seed_demo(args.admin, args.customer)
    print("Done.")

if __name__ == "__main__":
    main()
