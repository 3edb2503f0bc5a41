"""
Services for the bootrun run command.

Logging lives here; everything involved in launching the application
(arguments, classpath, forked and inline runners, the orchestrator) is
in the launch/ subpackage.
"""
