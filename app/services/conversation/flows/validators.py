import logging
from typing import Tuple, Optional
from pydantic import ValidationError
from app.schemas.answer_schema import AnswerSchema, OptionSchema

logger = logging.getLogger(__name__)


class AnswerValidators:
    """
    Responsabilidad única: Validaciones de las respuestas de los flujos.
    Encapsula toda la lógica de validación usando Pydantic schemas.
    """

    @staticmethod
    def validate_answer(answer: str) -> Tuple[bool, str, Optional[str]]:
        """
        Valida una respuesta de texto libre usando AnswerSchema.

        Returns:
            Tuple[bool, str, Optional[str]]: (is_valid, error_message, cleaned_value)
        """
        try:
            schema = AnswerSchema(value=answer or "")
            return (True, "", schema.value)
        except ValidationError as e:
            error_msg = e.errors()[0]['msg']
            logger.warning(f"Respuesta inválida: {error_msg}")
            return (False, error_msg, None)

    @staticmethod
    def validate_option(option: str, max_option: int) -> Tuple[bool, str, Optional[int]]:
        """
        Valida la elección de una opción numerada usando OptionSchema.

        Returns:
            Tuple[bool, str, Optional[int]]: (is_valid, error_message, option)
        """
        try:
            schema = OptionSchema(option=option or "", max_option=max_option)
            return (True, "", schema.option)
        except ValidationError as e:
            error_msg = e.errors()[0]['msg']
            logger.warning(f"Opción inválida '{option}': {error_msg}")
            return (False, error_msg, None)
