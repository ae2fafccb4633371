"""Services subpackage - config store, quote drafts, reports and export."""
