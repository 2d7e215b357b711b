"""Infrastructure: Cosmic content store adapter and Redis cache."""
