import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, TypeVar, Generic

# Type variables for generic connector
InputT = TypeVar('InputT')
OutputT = TypeVar('OutputT')

logger = logging.getLogger(__name__)


class ConnectorError(Exception):
    """Base exception for connector errors."""
    pass


class InvocationError(ConnectorError):
    """Error during backend communication."""
    pass


class RunCancelled(ConnectorError):
    """The request was aborted before the backend answered."""
    pass


class BackendConnector(ABC, Generic[InputT, OutputT]):
    """Abstract base class for all backend connectors.

    Implements the translation pipeline pattern:
    1. _translate_input: Convert standard input to backend format
    2. _invoke: Send to backend and receive response
    3. _translate_output: Convert backend response to standard output

    The execute() method orchestrates this pipeline.
    """

    def execute(self, input_data: InputT) -> OutputT:
        """Execute the full translation pipeline.

        This is the template method that orchestrates:
        translate_input → invoke → translate_output
        """
        connector_name = self.__class__.__name__
        try:
            logger.debug("[connector:%s] step 1: _translate_input", connector_name)
            payload = self._translate_input(input_data)

            logger.debug("[connector:%s] step 2: _invoke", connector_name)
            response = self._invoke(payload)

            logger.debug("[connector:%s] step 3: _translate_output", connector_name)
            return self._translate_output(response)
        except ConnectorError:
            raise
        except Exception as e:
            raise ConnectorError(f"Execution failed: {e}") from e

    @abstractmethod
    def _translate_input(self, data: InputT) -> Any:
        """Convert standard input to backend-specific format."""
        pass

    @abstractmethod
    def _invoke(self, payload: Any) -> Any:
        """Send payload to backend and receive response.

        Raises:
            InvocationError: backend failed
            RunCancelled: caller aborted the request
        """
        pass

    @abstractmethod
    def _translate_output(self, response: Any) -> OutputT:
        """Convert backend response to standard output format."""
        pass

    def close(self):
        """Release resources."""
        pass


class LLMConnector(BackendConnector[Dict[str, Any], Dict[str, Any]]):
    """Abstract base class for text-generation connectors.

    Input: {"model": ModelProfile, "prompt": str, "max_tokens": int, ...}
    Output: {"output": str, "tokens": int, "cost": float}
    """

    def generate(self, model, prompt: str, **kwargs) -> Dict[str, Any]:
        """Generate text from prompt with the given model."""
        return self.execute({"model": model, "prompt": prompt, **kwargs})
