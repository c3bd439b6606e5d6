from .errors import MockCodeError, ConfigError, HookInvocationError, PipelineError
from .hooks import HookEvent, HookEntry, HookExecutor, NoopHookExecutor, create_hook_executor, load_hooks_config
from .scenario import ScenarioResponse, load_scenario_file, DEFAULT_RESPONSES
from .matcher import match, NO_MATCH
from .session import SessionContext, create_session_context, append_history, append_session
from .orchestrator import LifecycleOrchestrator, SessionPhase, single_prompt, interactive_prompts
