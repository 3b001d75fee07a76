from bookmark_launchers.main import run

run()
