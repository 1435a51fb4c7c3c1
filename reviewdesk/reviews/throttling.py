from rest_framework.throttling import ScopedRateThrottle


class ScopedRateThrottleIsolated(ScopedRateThrottle):
    """
    Scoped throttle keyed by scope, client and the rate in force.

    Changing the approve rate (REVIEWS_APPROVE_RATE, or a patched rate in
    tests) starts a fresh request history instead of reusing the old one.
    """
    def get_cache_key(self, request, view):
        key = super().get_cache_key(request, view)
        if key is None:
            return None
        return f"{key}:{self.get_rate() or 'none'}"
