"""Services subpackage - catalogue admin, quote submission and notification."""
