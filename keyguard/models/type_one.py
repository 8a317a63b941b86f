"""
Keyguard Type-One Automation Detector

Pure rules over event counts. Detects automation that injects the password
(paste, password managers, scripted value assignment) instead of producing a
realistic sequence of key events.

No ML. No timing. Just counts.
"""

from keyguard.processors.keystrokes import ParsedCounts


class TypeOneDetector:
    """
    Stateless detector for paste/insert style automation.

    Decision Logic:
        - any insert of more than one character at once -> automated
        - no down/up events at all (soft keyboards) -> automated if fewer
          inserts than password_min_length
        - otherwise -> automated if down or up events are fewer than
          password_min_length
    """

    MAX_HUMAN_INSERT_LEN: int = 1

    def is_automated(self, counts: ParsedCounts, password_min_length: int) -> bool:
        """
        Decide whether the counts indicate type-one automation.

        Args:
            counts: Parsed event counts for the attempt.
            password_min_length: Minimum password length of the caller's realm.

        Returns:
            True if the password was likely pasted or injected.
        """
        for length in counts.insert_lengths:
            if length > self.MAX_HUMAN_INSERT_LEN:
                return True

        # Phone or tablet: only insert events can occur
        if not counts.has_key_events:
            return counts.insert_count < password_min_length

        return (
            counts.up_count < password_min_length
            or counts.down_count < password_min_length
        )
