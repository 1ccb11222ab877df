"""API automation: framework, service facades and test cases."""
