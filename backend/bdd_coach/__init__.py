"""Rule-based scenario grading and adaptive curriculum progression."""
