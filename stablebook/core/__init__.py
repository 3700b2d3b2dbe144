"""Domain logic: reminders, gestation, insights, legacy labels and the assistant."""
