from prometheus_client import Counter, Gauge, Histogram

job_runs = Counter(
    "jobrunner_job_runs_total",
    "Job executions by outcome",
    ["job", "outcome"],
)
job_duration = Histogram(
    "jobrunner_job_duration_seconds",
    "Wall-clock time of job executions",
    ["job"],
)
jobs_skipped = Counter(
    "jobrunner_jobs_skipped_total",
    "Jobs skipped because a previous run still holds the lock",
    ["job"],
)
held_job_locks = Gauge(
    "jobrunner_held_job_locks",
    "Job locks currently present in Redis",
)
