"""
Create or reset a Director account against the configured database.

Usage (from the backend directory):
    python -m scripts.create_director --email boss@company.com --password 'S3cret!pass' \
        --first-name Jane --last-name Doe --doc-number 12345678900 --birth-date 1980-05-17
"""
import argparse
import asyncio
from datetime import date

from sqlalchemy import select

from app.core.security import get_password_hash
from app.db.session import AsyncSessionLocal
from app.models.employee import Employee, EmployeeRole
from app.services.authorization import ensure_adult, validate_password_policy


async def create_director(args: argparse.Namespace) -> None:
    birth_date = date.fromisoformat(args.birth_date)
    ensure_adult(birth_date)
    validate_password_policy(args.password)

    async with AsyncSessionLocal() as db:
        result = await db.execute(select(Employee).where(Employee.email == args.email))
        existing = result.scalar_one_or_none()

        if existing:
            print(f"Employee {args.email} already exists.")
            # Reset credentials and promote
            existing.password_hash = get_password_hash(args.password)
            existing.role = int(EmployeeRole.DIRECTOR)
            await db.commit()
            print(f"Reset password and set role Director for {args.email}")
            return

        employee = Employee(
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            doc_number=args.doc_number,
            birth_date=birth_date,
            role=int(EmployeeRole.DIRECTOR),
            password_hash=get_password_hash(args.password),
        )
        db.add(employee)
        await db.commit()
        print(f"Created Director: {args.email}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or reset a Director account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="Director")
    parser.add_argument("--doc-number", required=True)
    parser.add_argument("--birth-date", required=True, help="YYYY-MM-DD")
    return parser.parse_args(argv)


if __name__ == "__main__":
    asyncio.run(create_director(parse_args()))
