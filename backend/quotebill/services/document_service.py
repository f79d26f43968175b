"""
Service Layer per Preventivi e Fatture
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Definisce la logica di business condivisa dai due tipi di documento:
numerazione univoca, ricalcolo totali, CRUD per utente e anteprima.
"""

import logging
import uuid
from typing import Optional, Union

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from quotebill.core.config import settings
from quotebill.core.exceptions import (
    BusinessValidationError,
    DuplicateError,
    NotFoundError,
    PersistenceError,
)
from quotebill.domain.document import (
    DocumentPreview,
    build_preview,
    hydrate_defaults,
    new_document,
    status_enum,
)
from quotebill.domain.line_item import LineItem
from quotebill.domain.numbering import (
    DocumentKind,
    generate_unique_document_number,
    resolve_number_for_insert,
)
from quotebill.domain.totals import DocumentTotals, calculate_totals, item_net
from quotebill.models import Bill, BillItem, Quotation, QuotationItem
from quotebill.schemas.document import (
    DocumentList,
    DocumentListItem,
    DocumentPreviewRead,
    DocumentWrite,
    DraftRead,
    LineItemBase,
)
from quotebill.services.settings_service import SettingsService

# Logger per questo modulo
logger = logging.getLogger(__name__)

DocumentModel = Union[Quotation, Bill]


class DocumentService:
    """
    Service base per la gestione dei documenti.

    Le sottoclassi definiscono il modello, il modello delle righe,
    il tipo di documento e l'etichetta usata nei messaggi.

    Regole:
    - I totali sono sempre ricalcolati dalle righe, mai accettati dal client
    - Il numero è scelto al primo inserimento e non cambia più
    - Ogni lettura e scrittura è filtrata per utente
    """

    model: type = None
    item_model: type = None
    kind: DocumentKind = None
    label: str = "documento"

    def __init__(self, settings_service: Optional[SettingsService] = None) -> None:
        self.settings_service = settings_service or SettingsService()

    # ------------------------------------------------------------
    # Numerazione
    # ------------------------------------------------------------

    async def number_exists(self, db: AsyncSession, number: str) -> bool:
        """
        Verifica se un numero è già usato da un documento dello stesso tipo.

        La verifica è globale, non limitata all'utente: il vincolo unique
        sul database è globale.

        Raises:
            PersistenceError: Database non raggiungibile
        """
        stmt = select(func.count(self.model.id)).where(self.model.number == number)
        try:
            result = await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Errore verifica numero {number}: {e}")
            raise PersistenceError(
                f"Impossibile verificare il numero {number}: riprovare il salvataggio"
            ) from e
        return (result.scalar_one() or 0) > 0

    def _exists_check(self, db: AsyncSession):
        async def exists(kind: DocumentKind, number: str) -> bool:
            return await self.number_exists(db, number)
        return exists

    # ------------------------------------------------------------
    # Costruzione documento
    # ------------------------------------------------------------

    def _build_items(self, items: list[LineItem]) -> list:
        return [
            self.item_model(
                description=item.description,
                quantity=item.quantity,
                rate=item.rate,
                discount=item.discount,
                discount_type=item.discount_type.value,
                amount=item_net(item),
                position=position,
            )
            for position, item in enumerate(items)
        ]

    def _apply(
        self,
        document: DocumentModel,
        data: DocumentWrite,
        items: list[LineItem],
        totals: DocumentTotals,
    ) -> None:
        """Copia intestazione, testi, stato, righe e totali sul modello."""
        document.company_name = data.company_name
        document.company_address = data.company_address
        document.company_phone = data.company_phone
        document.company_email = data.company_email
        document.client_name = data.client_name
        document.client_address = data.client_address
        document.document_date = data.document_date
        document.due_date = data.due_date
        document.terms = data.terms
        document.notes = data.notes
        document.signature = data.signature
        document.status = data.status.value
        document.items = self._build_items(items)
        document.subtotal = totals.subtotal
        document.total_discount = totals.total_discount
        document.total_amount = totals.total

    def _new_model(
        self,
        user_id: uuid.UUID,
        number: str,
        data: DocumentWrite,
        items: list[LineItem],
        totals: DocumentTotals,
    ) -> DocumentModel:
        document = self.model(user_id=user_id, number=number)
        self._apply(document, data, items, totals)
        return document

    async def _insert(self, db: AsyncSession, document: DocumentModel) -> bool:
        """
        Inserisce il documento con le sue righe in un'unica transazione.

        Returns:
            bool: False se il numero è stato preso nel frattempo

        Raises:
            PersistenceError: Qualsiasi altro errore del database
        """
        db.add(document)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.error(f"Numero {document.number} già presente al salvataggio: {e}")
            return False
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Errore salvataggio {self.label} {document.number}: {e}")
            raise PersistenceError(f"Salvataggio {self.label} non riuscito") from e
        return True

    # ------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------

    async def create(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        data: DocumentWrite,
    ) -> DocumentModel:
        """
        Crea un nuovo documento.

        Steps:
        1. Converte le righe e ricalcola i totali
        2. Mantiene il numero proposto se libero, altrimenti ne genera uno
        3. Inserisce documento e righe
        4. Se il vincolo unique scatta comunque, rigenera il numero e riprova una volta

        Args:
            db: Sessione database
            user_id: Utente proprietario
            data: Dati del documento (con numero proposto opzionale)

        Returns:
            Il documento creato

        Raises:
            PersistenceError: Database non raggiungibile
            DuplicateError: Numero ancora in conflitto dopo la rigenerazione
        """
        items = data.line_items()
        totals = calculate_totals(items)
        exists = self._exists_check(db)
        max_attempts = settings.document_number_max_attempts

        number = await resolve_number_for_insert(
            self.kind, getattr(data, "number", None), exists, max_attempts
        )
        document = self._new_model(user_id, number, data, items, totals)

        if not await self._insert(db, document):
            number = await generate_unique_document_number(self.kind, exists, max_attempts)
            document = self._new_model(user_id, number, data, items, totals)
            if not await self._insert(db, document):
                raise DuplicateError(f"Numero {number} già in uso, riprovare il salvataggio")

        await db.refresh(document)
        logger.info(f"Documento {document.number} ({self.label}) creato per utente {user_id}")
        return document

    async def get_by_id(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
    ) -> DocumentModel:
        """
        Recupera un documento dell'utente con le sue righe.

        Raises:
            NotFoundError: Documento inesistente o di un altro utente
        """
        stmt = (
            select(self.model)
            .where(and_(self.model.id == document_id, self.model.user_id == user_id))
            .options(selectinload(self.model.items))
        )
        result = await db.execute(stmt)
        document = result.scalar_one_or_none()

        if not document:
            raise NotFoundError(f"Documento ({self.label}) con ID {document_id} non trovato")

        return document

    async def get_all(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        status_filter: Optional[str] = None,
        page: int = 1,
        per_page: int = 10,
    ) -> DocumentList:
        """
        Recupera la lista paginata dei documenti dell'utente, dal più recente.

        Args:
            db: Sessione database
            user_id: Utente proprietario
            status_filter: Filtro per stato
            page: Numero pagina
            per_page: Elementi per pagina

        Raises:
            BusinessValidationError: Stato non valido per il tipo di documento
        """
        conditions = [self.model.user_id == user_id]
        if status_filter:
            conditions.append(self.model.status == self._validate_status(status_filter))

        count_stmt = select(func.count(self.model.id)).where(and_(*conditions))
        total_result = await db.execute(count_stmt)
        total = total_result.scalar_one() or 0

        offset = (page - 1) * per_page
        stmt = (
            select(self.model)
            .where(and_(*conditions))
            .order_by(self.model.created_at.desc())
            .offset(offset)
            .limit(per_page)
        )
        result = await db.execute(stmt)
        documents = result.scalars().all()

        total_pages = (total + per_page - 1) // per_page if total > 0 else 1

        return DocumentList(
            items=[DocumentListItem.model_validate(doc) for doc in documents],
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages,
        )

    async def update(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
        data: DocumentWrite,
    ) -> DocumentModel:
        """
        Aggiorna un documento esistente sostituendo le righe.

        Il numero non viene mai rigenerato.

        Raises:
            NotFoundError: Documento inesistente o di un altro utente
            PersistenceError: Errore del database
        """
        document = await self.get_by_id(db, user_id, document_id)

        items = data.line_items()
        self._apply(document, data, items, calculate_totals(items))

        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Errore aggiornamento {self.label} {document.number}: {e}")
            raise PersistenceError(f"Aggiornamento {self.label} non riuscito") from e

        await db.refresh(document)
        logger.info(f"Documento {document.number} ({self.label}) aggiornato")
        return document

    async def update_status(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
        status: str,
    ) -> DocumentModel:
        """
        Cambia lo stato del documento.

        Raises:
            NotFoundError: Documento inesistente o di un altro utente
            BusinessValidationError: Stato non valido per il tipo di documento
            PersistenceError: Errore del database
        """
        new_status = self._validate_status(status)
        document = await self.get_by_id(db, user_id, document_id)

        old_status = document.status
        document.status = new_status
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Errore cambio stato {self.label} {document.number}: {e}")
            raise PersistenceError(f"Cambio stato {self.label} non riuscito") from e

        await db.refresh(document)
        logger.info(f"Documento {document.number} ({self.label}): stato {old_status} -> {new_status}")
        return document

    async def delete(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
    ) -> None:
        """
        Elimina il documento e le sue righe.

        Raises:
            NotFoundError: Documento inesistente o di un altro utente
            PersistenceError: Errore del database
        """
        document = await self.get_by_id(db, user_id, document_id)
        number = document.number

        try:
            await db.delete(document)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Errore eliminazione {self.label} {number}: {e}")
            raise PersistenceError(f"Eliminazione {self.label} non riuscita") from e

        logger.info(f"Documento {number} ({self.label}) eliminato")

    # ------------------------------------------------------------
    # Anteprima e nuovo documento
    # ------------------------------------------------------------

    async def preview(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
        show_discount: bool = True,
    ) -> DocumentPreview:
        """Totali formattati e importo in lettere di un documento salvato."""
        document = await self.get_by_id(db, user_id, document_id)
        return build_document_preview(
            [item.to_line_item() for item in document.items],
            show_discount=show_discount,
        )

    async def new_draft(self, db: AsyncSession, user_id: uuid.UUID) -> DraftRead:
        """
        Nuovo documento non salvato, precompilato con le impostazioni utente.

        Il numero è solo una proposta: viene verificato al primo salvataggio.
        """
        defaults = await self.settings_service.get_defaults(db, user_id)
        draft = new_document(self.kind, due_days=settings.default_due_days)
        hydrate_defaults(draft, defaults)

        return DraftRead(
            number=draft.number,
            status=draft.status,
            company_name=draft.company_name,
            company_address=draft.company_address,
            company_phone=draft.company_phone,
            company_email=draft.company_email,
            client_name=draft.client_name,
            client_address=draft.client_address,
            document_date=draft.document_date,
            due_date=draft.due_date,
            terms=draft.terms,
            notes=draft.notes,
            signature=draft.signature,
            items=[LineItemBase.model_validate(item) for item in draft.items],
            preview=DocumentPreviewRead.model_validate(build_document_preview(draft.items)),
        )

    def _validate_status(self, status: str) -> str:
        enum = status_enum(self.kind)
        try:
            return enum(status).value
        except ValueError:
            allowed = ", ".join(member.value for member in enum)
            raise BusinessValidationError(
                f"Stato '{status}' non valido per {self.label}: ammessi {allowed}"
            )


def build_document_preview(items: list[LineItem], show_discount: bool = True) -> DocumentPreview:
    """Anteprima con etichetta valuta e formato importo in lettere da configurazione."""
    return build_preview(
        items,
        show_discount=show_discount,
        currency_label=settings.currency_label,
        words_suffix=settings.amount_words_suffix,
        legacy_spacing=settings.amount_words_legacy_spacing,
    )


class QuotationService(DocumentService):
    """Service per i preventivi (QUO-NNNNNN, stato iniziale draft)."""

    model = Quotation
    item_model = QuotationItem
    kind = DocumentKind.QUOTATION
    label = "preventivo"


class BillService(DocumentService):
    """Service per le fatture (BILL-NNNNNN, stato iniziale unpaid)."""

    model = Bill
    item_model = BillItem
    kind = DocumentKind.BILL
    label = "fattura"
