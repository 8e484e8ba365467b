"""Business logic for accounts and posts; raises errors from blog.services.errors."""
