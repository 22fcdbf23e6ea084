from .cli import app

app(prog_name="cycling-rag")
