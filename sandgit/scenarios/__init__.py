"""Built-in practice tasks. Each S<n>_<name>.py module defines a TASK dict."""
