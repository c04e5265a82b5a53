"""ViewModel package for dashboard presentation state.

Call context:
    ``clientportal/app/main.py`` builds a ``DashboardVM`` and feeds it the
    view model returned by the dashboard use cases.

Dependencies:
    Modules in this package depend on domain types and lightweight formatting
    helpers only. I/O adapters and use-case orchestration remain outside.
"""
