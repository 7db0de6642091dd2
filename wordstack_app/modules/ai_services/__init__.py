# File: wordstack_app/modules/ai_services/__init__.py
# Completion and image providers shared by the dictionary, articles and images modules.
