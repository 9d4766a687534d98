from docker_monitor.cli import app

app()
