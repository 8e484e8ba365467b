"""Blog platform: accounts, role-based access and posts over a FastAPI app."""
