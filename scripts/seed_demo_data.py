import sys
import os
from datetime import timedelta
from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from app.core.time import utc_now
from app.db.session import engine, init_db
from app.models import Category, CategoryCreate, TaskCreate, TaskPriority, TaskStatus
from app.services.categories import create_category
from app.services.tasks import create_task

DEMO_CATEGORIES = [
    ("Work", "#ff0000"),
    ("Personal", "#00aa55"),
    ("Errands", None),
]

def seed_demo_data():
    print("--- Demo Data Seeding ---")
    init_db(engine)

    with Session(engine) as session:
        # Check if data already exists
        if session.exec(select(Category).limit(1)).first():
            print("Categories already exist, skipping.")
            return

        by_name = {}
        for name, color in DEMO_CATEGORIES:
            category = create_category(session, CategoryCreate(name=name, color=color))
            by_name[name] = category.id
            print(f"Created category {name} (id={category.id})")

        now = utc_now()
        tasks = [
            TaskCreate(
                title="Ship report",
                description="Quarterly numbers for the team",
                priority=TaskPriority.high,
                due_date=now + timedelta(days=2),
                category_ids=[by_name["Work"]],
            ),
            TaskCreate(
                title="Buy groceries",
                priority=TaskPriority.low,
                category_ids=[by_name["Personal"], by_name["Errands"]],
            ),
            TaskCreate(
                title="Renew passport",
                status=TaskStatus.completed,
                due_date=now - timedelta(days=5),
                category_ids=[by_name["Personal"]],
            ),
        ]
        for task_in in tasks:
            task = create_task(session, task_in)
            print(f"Created task {task.title!r} (id={task.id}, categories={[c.name for c in task.categories]})")

    print("Demo data seeded successfully!")

if __name__ == "__main__":
    seed_demo_data()
