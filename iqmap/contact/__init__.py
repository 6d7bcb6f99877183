"""Contact-form submission: payload validation and the relay client."""
