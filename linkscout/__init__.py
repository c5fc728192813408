"""linkscout — listing page link classification and whitepaper text."""
