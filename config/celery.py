"""
Alpha Inventory — Celery Application

Workers and beat load Django settings and discover each app's tasks.py.

@file config/celery.py
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('alphapack')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
