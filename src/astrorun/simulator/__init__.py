"""Desktop host for ASTRO RUN."""
