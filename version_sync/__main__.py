from version_sync.cli.app import app

app()
