from todo_service.main import run

run()
