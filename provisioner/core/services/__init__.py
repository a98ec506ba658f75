"""Services — one module per provisioning stage."""
