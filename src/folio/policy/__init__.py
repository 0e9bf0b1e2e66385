"""Exit-code policy for the verification suites."""
