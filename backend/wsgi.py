from greenleaf import create_app

app = create_app()
