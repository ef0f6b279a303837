"""SkyCast: AI-assisted weather lookup."""
