from dotenv import load_dotenv

load_dotenv()

from rentals import create_app, db  # noqa: E402
from rentals.models import User, Property, Payment, ActivityLog, ReminderSettings  # noqa: E402

app = create_app()

@app.shell_context_processor
def make_shell_context():
    return {'db': db, 'User': User, 'Property': Property, 'Payment': Payment,
            'ActivityLog': ActivityLog, 'ReminderSettings': ReminderSettings}

if __name__ == '__main__':
    import os
    port = int(os.environ.get('PORT', 3000))
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1', host='0.0.0.0', port=port)
