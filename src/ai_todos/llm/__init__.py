"""Model clients: Gemini over REST and an offline stand-in for demos."""
