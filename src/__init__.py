# Wolf Street - Source Package
#
# Modules:
#   - config: Configuration constants and secrets
#   - utils: Shared date helpers
#   - session: Per-user session context
#   - auth: Sign-in and the admin approval gate
#   - validation: Form validation
#   - database: Database operations (conferences, calendar_events, profiles)
#   - llm: LLM clients and generation functions
#   - calendar_sync: Conference/calendar linking, import, invites
#   - outlook: Microsoft Graph actions and the client-side connection
#   - ingestion: Conference details from a website URL
