"""ORM models registered on palette.database.Base."""
