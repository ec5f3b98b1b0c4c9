"""Output layer — human and machine rendering of ServiceResult."""
