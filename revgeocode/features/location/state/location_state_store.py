"""共有位置ステート"""

from collections.abc import Callable, Iterable
from typing import Optional

from ....shared.logging.config import get_logger
from ..domain.models import DEFAULT_LOCATION_RECORD, LocationRecord, Slot

logger = get_logger(__name__)

SlotListener = Callable[[Slot, LocationRecord], None]


class LocationStateStore:
    """
    current / origin / destination の3スロットを持つ共有ステート

    レコードの検証は行わない。スロット間の整合性は呼び出し側のポリシーで保つ。

    discard_stale が有効な場合、issue_token で発行したトークンより古い完了は破棄する
    （無効時は最後に完了した書き込みが勝つ）
    """

    def __init__(
        self,
        initial_record: LocationRecord = DEFAULT_LOCATION_RECORD,
        discard_stale: bool = False,
    ) -> None:
        """
        Args:
            initial_record: 全スロットの初期値
            discard_stale: 古いトークンの書き込みを破棄するか
        """
        self.discard_stale = discard_stale
        self._records: dict[Slot, LocationRecord] = {slot: initial_record for slot in Slot}
        self._issued: dict[Slot, int] = {slot: 0 for slot in Slot}
        self._accepted: dict[Slot, int] = {slot: 0 for slot in Slot}
        self._listeners: list[tuple[SlotListener, Optional[frozenset[Slot]]]] = []

    def get(self, slot: Slot) -> LocationRecord:
        """スロットの現在値を取得"""
        return self._records[Slot(slot)]

    def snapshot(self) -> dict[Slot, LocationRecord]:
        """全スロットの現在値を取得"""
        return dict(self._records)

    def issue_token(self, slot: Slot) -> int:
        """
        スロットへの書き込み予約トークンを発行（単調増加）

        Returns:
            int: トークン
        """
        slot = Slot(slot)
        self._issued[slot] += 1
        return self._issued[slot]

    def set(self, slot: Slot, record: LocationRecord, token: Optional[int] = None) -> bool:
        """
        スロットに書き込み、購読者に通知

        Args:
            slot: スロット
            record: 書き込むレコード
            token: issue_token で発行したトークン（省略時は常に受け付ける）

        Returns:
            bool: 書き込んだ場合True、古い完了として破棄した場合False
        """
        slot = Slot(slot)

        if token is not None:
            if self.discard_stale and token < self._accepted[slot]:
                logger.info(
                    f"Discarded stale write to {slot.value} "
                    f"(token={token}, accepted={self._accepted[slot]})"
                )
                return False
            self._accepted[slot] = max(self._accepted[slot], token)

        self._records[slot] = record
        logger.debug(f"Slot {slot.value} updated: {record.address.city}")

        self._notify(slot, record)
        return True

    def subscribe(
        self,
        listener: SlotListener,
        slots: Optional[Iterable[Slot]] = None,
    ) -> Callable[[], None]:
        """
        スロット変更の購読を登録

        Args:
            listener: listener(slot, record) の形で呼ばれるコールバック
            slots: 購読するスロット（Noneの場合は全スロット）

        Returns:
            Callable[[], None]: 購読解除関数
        """
        entry = (listener, frozenset(Slot(s) for s in slots) if slots is not None else None)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def _notify(self, slot: Slot, record: LocationRecord) -> None:
        for listener, slots in list(self._listeners):
            if slots is not None and slot not in slots:
                continue
            try:
                listener(slot, record)
            except Exception as e:
                logger.error(f"Slot listener failed for {slot.value}: {e}", exc_info=True)
