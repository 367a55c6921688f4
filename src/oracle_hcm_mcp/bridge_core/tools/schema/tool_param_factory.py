import inspect
from typing import Annotated, Any, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class FieldTuple(BaseModel):
    """Typed (annotation, FieldInfo) pair for pydantic's create_model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    annotation: Any
    field: FieldInfo


class ToolParameterFactory:
    """Turns one tool function parameter into a pydantic field definition."""

    @classmethod
    def build_field_tuple(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> FieldTuple:
        """Create the field definition for a single parameter.

        The description attached through ``Annotated[..., Field(description=...)]``
        is carried into the field, so it ends up in the advertised input schema.

        Args:
            param_name: The name of the parameter.
            param: The inspect.Parameter object.
            tool_name: The name of the tool, for error reporting.

        Returns:
            A FieldTuple with the annotation and a Field holding default and description.
        """
        description = cls._extract_description(param.annotation, param_name, tool_name)
        default = ... if param.default is inspect.Parameter.empty else param.default
        return FieldTuple(annotation=param.annotation, field=Field(default=default, description=description))

    @staticmethod
    def _extract_description(annotation: Any, param_name: str, tool_name: str) -> str:
        """Return the Field description attached to an Annotated parameter.

        Raises:
            ToolValidationError: If the parameter carries no description.
        """
        if get_origin(annotation) is Annotated:
            for metadata in get_args(annotation)[1:]:
                if isinstance(metadata, FieldInfo) and metadata.description:
                    return metadata.description

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')]"
        )
        logger.error(msg)
        raise ToolValidationError(msg)
