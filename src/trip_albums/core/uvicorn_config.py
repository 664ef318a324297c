import multiprocessing

from trip_albums.core.config import configs

is_prod = configs.ENVIRONMENT == "production"

uvicorn_settings = {
    "workers": min(multiprocessing.cpu_count(), 2) if is_prod else 1,
    "backlog": 4096,
    "timeout_keep_alive": 120,
}

if is_prod:
    uvicorn_settings.update({
        "loop": "uvloop",
        "http": "httptools",
        "access_log": True,
        "log_level": "info",
    })
