"""Generate the JSON schema of the tokens of the enumerations."""
