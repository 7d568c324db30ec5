"""Infrastructure: database and SQLModel repositories."""
