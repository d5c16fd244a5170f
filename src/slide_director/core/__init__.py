from slide_director.core.session import AgentSession

__all__ = ["AgentSession"]
