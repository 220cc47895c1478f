"""Initialize the database tables, reminder settings and first administrator"""
import os
from dotenv import load_dotenv

load_dotenv()
os.environ.setdefault('SCHEDULER_ENABLED', 'false')

from rentals import create_app, db  # noqa: E402
from rentals.models import User, ReminderSettings, ROLE_ADMIN  # noqa: E402


def init_database():
    app = create_app()

    with app.app_context():
        os.makedirs(os.path.join(app.root_path, '..', 'data'), exist_ok=True)
        db.create_all()
        ReminderSettings.get(app.config['DEFAULT_REMINDER_DAYS'])

        if User.query.count() == 0:
            password = app.config['ADMIN_PASSWORD']
            if not password:
                raise SystemExit("Set ADMIN_PASSWORD to create the first administrator")
            admin = User(email=app.config['ADMIN_EMAIL'].lower(), role=ROLE_ADMIN)
            admin.set_password(password)
            db.session.add(admin)
            print(f"Administrator {admin.email} created")

        db.session.commit()
        print("Database tables created successfully!")

if __name__ == '__main__':
    init_database()
