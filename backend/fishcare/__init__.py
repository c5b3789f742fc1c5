"""Fish Care session authentication backend."""
