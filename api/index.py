# api/index.py
# Vercel entry point. The backend modules are installed with the project
# (`pip install .`), so the same app serves both here and in local dev.
from app import create_app

app = create_app()

# Vercel ignores this block, but it's useful for local testing
if __name__ == '__main__':
    app.run(debug=True, port=5000)
