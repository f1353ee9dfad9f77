"""Recipe extraction strategies, one module per strategy."""
