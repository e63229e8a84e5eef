from cqrs.core.celery_app import celery_app


def test_celery_app_configuration():
    assert celery_app.main == "cqrs"
    assert celery_app.conf.task_serializer == "json"
    assert "json" in celery_app.conf.accept_content
    assert celery_app.conf.timezone == "UTC"
    assert celery_app.conf.task_default_queue == "default"


def test_job_task_is_registered():
    from cqrs.jobs import handle_job

    assert handle_job.name == "cqrs.handle_job"
    assert "cqrs.handle_job" in celery_app.tasks
