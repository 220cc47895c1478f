import atexit
import logging
import os

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)


def init_scheduler(app):
    """Start the periodic reminder sweep unless disabled or under test"""
    if app.config.get('TESTING') or not app.config.get('SCHEDULER_ENABLED'):
        return None
    # The debug reloader runs the app twice; only the child should schedule
    if app.debug and os.environ.get('WERKZEUG_RUN_MAIN') != 'true':
        return None

    def sweep():
        with app.app_context():
            try:
                app.reminder_service.run_sweep()
            except Exception as e:
                logger.error(f'Scheduled reminder sweep failed: {e}', exc_info=True)

    hours = app.config.get('REMINDER_SWEEP_HOURS', 1)
    scheduler = BackgroundScheduler()
    scheduler.add_job(sweep, 'interval', hours=hours, id='reminder_sweep',
                      max_instances=1, coalesce=True)
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False))
    app.scheduler = scheduler
    logger.info(f'Reminder sweep scheduled every {hours} hour(s)')
    return scheduler
