from rest_framework.throttling import UserRateThrottle


class SubmissionRateThrottle(UserRateThrottle):
    """Rate limit for exam submissions; rate comes from the 'submission' scope setting."""
    scope = 'submission'
