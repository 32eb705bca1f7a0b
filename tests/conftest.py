import os

os.environ.update(
    {
        "REDIS_URL": "redis://localhost:6380/1",
        "WEBHOOK_TOKEN": "test-webhook-token",
        "ENVIRONMENT": "test",
        "CRON_TIMEZONE": "UTC",
    }
)
