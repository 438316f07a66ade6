"""Domain operations. Each takes the acting Caller and a plain payload, enforces
the policy, writes through ``db.session`` and commits once."""
