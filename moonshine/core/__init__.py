"""Core building blocks: storage, embeddings and vector math."""
