"""Config subpackage - settings and the pricing document schema."""
