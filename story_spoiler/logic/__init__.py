"""Session state, expectations and the ordered scenario harness."""
